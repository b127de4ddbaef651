from app.services.auth import AuthService, registrable_role
from app.services.blog import BlogService

__all__ = ["AuthService", "BlogService", "registrable_role"]
