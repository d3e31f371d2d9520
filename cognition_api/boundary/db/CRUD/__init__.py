"""CRUD singletons for every MongoDB collection."""

from cognition_api.boundary.db.CRUD.base_crud import BaseCRUD
from cognition_api.boundary.db.CRUD.book_crud import book_crud
from cognition_api.boundary.db.CRUD.commerce_crud import cart_crud, order_crud
from cognition_api.boundary.db.CRUD.course_crud import course_crud
from cognition_api.boundary.db.CRUD.enrollment_crud import enrollment_crud
from cognition_api.boundary.db.CRUD.forum_crud import forum_post_crud, forum_reply_crud
from cognition_api.boundary.db.CRUD.image_crud import image_crud
from cognition_api.boundary.db.CRUD.live_session_crud import live_session_crud, session_booking_crud
from cognition_api.boundary.db.CRUD.progress_crud import progress_crud
from cognition_api.boundary.db.CRUD.review_crud import review_crud
from cognition_api.boundary.db.CRUD.transaction_crud import transaction_crud
from cognition_api.boundary.db.CRUD.user_crud import user_crud

__all__ = [
    "BaseCRUD",
    "book_crud",
    "cart_crud",
    "course_crud",
    "enrollment_crud",
    "forum_post_crud",
    "forum_reply_crud",
    "image_crud",
    "live_session_crud",
    "order_crud",
    "progress_crud",
    "review_crud",
    "session_booking_crud",
    "transaction_crud",
    "user_crud",
]
