"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_avatar_store,
    get_book_service,
    get_commerce_service,
    get_course_service,
    get_current_user,
    get_dashboard_service,
    get_enrollment_service,
    get_forum_service,
    get_image_service,
    get_live_session_service,
    get_payment_service,
    get_progress_service,
    get_review_service,
    get_service_cache,
    get_settings_dependency,
    get_user_service,
    require_admin,
)

__all__ = [
    "get_avatar_store",
    "get_book_service",
    "get_commerce_service",
    "get_course_service",
    "get_current_user",
    "get_dashboard_service",
    "get_enrollment_service",
    "get_forum_service",
    "get_image_service",
    "get_live_session_service",
    "get_payment_service",
    "get_progress_service",
    "get_review_service",
    "get_service_cache",
    "get_settings_dependency",
    "get_user_service",
    "require_admin",
]
