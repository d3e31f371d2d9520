"""API routers."""

from .books import router as books_router
from .commerce import router as commerce_router
from .courses import router as courses_router
from .dashboard import router as dashboard_router
from .enrollments import router as enrollments_router
from .forum import router as forum_router
from .health import router as health_router
from .images import router as images_router
from .live_sessions import router as live_sessions_router
from .payments import router as payments_router
from .progress import router as progress_router
from .reviews import router as reviews_router
from .users import router as users_router

__all__ = [
    "books_router",
    "commerce_router",
    "courses_router",
    "dashboard_router",
    "enrollments_router",
    "forum_router",
    "health_router",
    "images_router",
    "live_sessions_router",
    "payments_router",
    "progress_router",
    "reviews_router",
    "users_router",
]
