from app.routes.admin import router as admin_router
from app.routes.auth import router as auth_router
from app.routes.blog import router as blog_router
from app.routes.category import router as category_router
from app.routes.comment import router as comment_router
from app.routes.tag import router as tag_router

__all__ = [
    "admin_router",
    "auth_router",
    "blog_router",
    "category_router",
    "comment_router",
    "tag_router",
]
