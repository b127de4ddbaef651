# app/main.py

"""Quillpress Backend - blog CMS API with role-based access control."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.configs import settings
from app.errors import (
    BaseAppError,
    app_exception_handler,
    create_unhandled_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from app.managers import limiter, rate_limit_exceeded_handler
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.monitoring import get_logger
from app.routes import (
    admin_router,
    auth_router,
    blog_router,
    category_router,
    comment_router,
    tag_router,
)
from app.schemas import HealthCheckResponse
from app.utils.helpers import today_str

logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Quillpress blog CMS API",
    version=settings.VERSION,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
# Trust X-Forwarded-* from the reverse proxy so limiter keys see the client IP
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")


routes = [
    auth_router,
    blog_router,
    comment_router,
    category_router,
    tag_router,
    admin_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (BaseAppError, app_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (SQLAlchemyError, sqlalchemy_exception_handler),
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (Exception, create_unhandled_exception_handler(logger)),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter
limiter: Limiter = app.state.limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "message": "Server is healthy",
                        "version": "1.0.0",
                        "timestamp": "2026-01-01 00:00:00",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> HealthCheckResponse:
    """
    Liveness probe.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    HealthCheckResponse
        Static status with the running version and server time.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"status": "ok", "message": "Server is healthy", "version": "1.0.0", ...}
    """
    return HealthCheckResponse(
        status="ok",
        message="Server is healthy",
        version=request.app.version,
        timestamp=today_str(),
    )
