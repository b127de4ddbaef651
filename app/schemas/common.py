from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class HealthCheckResponse(BaseModel):
    """Liveness probe payload."""

    status: str
    message: str
    version: str
    timestamp: str
