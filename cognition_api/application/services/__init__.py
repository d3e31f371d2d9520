"""
Application services.

Each service wraps one resource's use cases over the CRUD singletons and is
constructed per request with the database handle.
"""

from cognition_api.application.services.book_service import BookService
from cognition_api.application.services.commerce_service import CommerceService
from cognition_api.application.services.course_service import CourseService
from cognition_api.application.services.dashboard_service import DashboardService
from cognition_api.application.services.enrollment_service import EnrollmentService
from cognition_api.application.services.forum_service import ForumService
from cognition_api.application.services.image_service import ImageService
from cognition_api.application.services.live_session_service import LiveSessionService
from cognition_api.application.services.payment_service import PaymentService
from cognition_api.application.services.progress_service import ProgressService
from cognition_api.application.services.review_service import ReviewService
from cognition_api.application.services.user_service import UserService

__all__ = [
    "BookService",
    "CommerceService",
    "CourseService",
    "DashboardService",
    "EnrollmentService",
    "ForumService",
    "ImageService",
    "LiveSessionService",
    "PaymentService",
    "ProgressService",
    "ReviewService",
    "UserService",
]
