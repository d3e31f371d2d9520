"""
Dependency injection container.

Factory functions for FastAPI dependencies: settings, cached external
clients, per-request services and the authenticated caller.

Dependencies: cognition_api.configs, cognition_api.application, cognition_api.boundary
System role: DI container for service injection
"""

import logging
from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.application.services import (
    BookService,
    CommerceService,
    CourseService,
    DashboardService,
    EnrollmentService,
    ForumService,
    ImageService,
    LiveSessionService,
    PaymentService,
    ProgressService,
    ReviewService,
    UserService,
)
from cognition_api.boundary.auth.firebase_client import FirebaseAuthClient
from cognition_api.boundary.db.connection import get_database
from cognition_api.boundary.payments.paystack_client import PaystackClient
from cognition_api.boundary.storage.avatar_store import AvatarStore
from cognition_api.configs import Settings, get_settings
from cognition_api.core.exceptions import AuthenticationError
from cognition_api.models.user import CurrentUser
from cognition_api.observability import set_caller_uid

logger = logging.getLogger(__name__)

TEST_USER = CurrentUser(uid="test-uid", email="test@example.com", name="Test User", phone="")


class ServiceCache:
    """Container for cached client instances."""

    def __init__(self):
        self._firebase_client = None
        self._paystack_client = None
        self._avatar_store = None

    @property
    def firebase_client(self) -> FirebaseAuthClient:
        """Get cached Firebase token verifier."""
        if self._firebase_client is None:
            self._firebase_client = FirebaseAuthClient(get_settings().firebase)
        return self._firebase_client

    @property
    def paystack_client(self) -> PaystackClient:
        """Get cached Paystack client."""
        if self._paystack_client is None:
            self._paystack_client = PaystackClient(get_settings().paystack)
        return self._paystack_client

    @property
    def avatar_store(self) -> AvatarStore:
        if self._avatar_store is None:
            self._avatar_store = AvatarStore(get_settings().server.uploads_dir)
        return self._avatar_store

    def clear(self) -> None:
        """Clear all cached instances."""
        self._firebase_client = None
        self._paystack_client = None
        self._avatar_store = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_course_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> CourseService:
    """
    Get course service instance.

    Args:
        db: Async database handle (injected via Depends)

    Returns:
        CourseService: Service instance
    """
    return CourseService(db)


def get_image_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> ImageService:
    """
    Get course image service instance.

    Args:
        db: Async database handle (injected via Depends)

    Returns:
        ImageService: Service instance
    """
    return ImageService(db)


def get_user_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> UserService:
    return UserService(db)


def get_forum_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> ForumService:
    return ForumService(db)


def get_review_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> ReviewService:
    return ReviewService(db)


def get_commerce_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> CommerceService:
    return CommerceService(db)


def get_enrollment_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> EnrollmentService:
    return EnrollmentService(db)


def get_progress_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> ProgressService:
    return ProgressService(db)


def get_dashboard_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> DashboardService:
    return DashboardService(db)


def get_book_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> BookService:
    return BookService(db)


def get_live_session_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> LiveSessionService:
    return LiveSessionService(db)


def get_payment_service(
    db: AsyncIOMotorDatabase = Depends(get_database),
    cache: ServiceCache = Depends(get_service_cache),
) -> PaymentService:
    """
    Get payment service instance.

    Args:
        db: Async database handle (injected via Depends)
        cache: Service cache holding the Paystack client

    Returns:
        PaymentService: Service instance
    """
    return PaymentService(db, cache.paystack_client)


def get_avatar_store(cache: ServiceCache = Depends(get_service_cache)) -> AvatarStore:
    return cache.avatar_store


async def get_current_user(
    request: Request,
    settings: Settings = Depends(get_settings_dependency),
    cache: ServiceCache = Depends(get_service_cache),
    user_service: UserService = Depends(get_user_service),
) -> CurrentUser:
    """
    Authenticate the caller from the Firebase bearer token.

    In the test environment with SKIP_AUTH set, a fixed test user is
    returned without contacting Firebase. Verified callers get a Users
    document on first sight.

    Raises:
        HTTPException(401): Missing header or rejected token
    """
    if settings.is_test and settings.server.skip_auth:
        return TEST_USER

    header = request.headers.get("Authorization")
    if not header or not header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header",
        )

    try:
        identity = await cache.firebase_client.verify_id_token(header.split(" ", 1)[1].strip())
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized") from e

    set_caller_uid(identity["uid"])
    await user_service.ensure_user(identity)
    return CurrentUser(**identity)


async def require_admin(
    user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> CurrentUser:
    """
    Restrict a route to admins.

    Raises:
        HTTPException(403): Caller's Users document is not an admin
    """
    if not await user_service.is_admin(user.uid):
        logger.warning("Admin access denied", extra={"uid": user.uid})
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user
