"""
Dashboard service.

Read-only summaries for the learner and admin dashboards, computed from
orders, forum activity, transactions and reviews.

Dependencies: cognition_api.boundary.db.CRUD
System role: Dashboard aggregation
"""

import math
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db.CRUD import (
    course_crud,
    forum_post_crud,
    forum_reply_crud,
    order_crud,
    review_crud,
    transaction_crud,
    user_crud,
)
from cognition_api.boundary.db.serialization import serialize_documents
from cognition_api.core.exceptions import UserNotFoundError
from cognition_api.core.timestamps import as_aware_datetime

COMPLETED_STATUS = "Completed"
RECENT_ACTIVITY_LIMIT = 10
RECENT_ORDERS_LIMIT = 10
TOP_SPENDERS_LIMIT = 5
DEFAULT_WEEKLY_GOALS = {"studyHours": {"current": 0, "target": 5}}


def _rounded_percent(part: int, whole: int) -> int:
    if not whole:
        return 0
    return math.floor(part / whole * 100 + 0.5)


def achievements_for(progress: dict[str, Any]) -> list[dict[str, Any]]:
    achievements = []
    if progress["completedCourses"] > 0:
        achievements.append({"name": "First Course", "icon": "🎓", "earned": True})
    if progress["totalStudyTime"] > 1000:
        achievements.append({"name": "Study Master", "icon": "📖", "earned": True})
    if progress["averageScore"] > 80:
        achievements.append({"name": "High Achiever", "icon": "⭐", "earned": True})
    return achievements


class DashboardService:
    """Dashboard aggregation over several collections."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db

    async def user_dashboard(self, uid: str) -> dict[str, Any]:
        """
        Summary for the learner dashboard.

        Raises:
            UserNotFoundError: If the caller has no Users document
        """
        user = await user_crud.get_by_uid(self.db, uid)
        if user is None:
            raise UserNotFoundError(details={"uid": uid})

        orders = await order_crud.list_for_user(self.db, uid)
        posts = await forum_post_crud.find_many(self.db, {"uid": uid})
        replies = await forum_reply_crud.find_many(self.db, {"uid": uid})
        courses = await course_crud.find_many(self.db, limit=3)

        total_courses = sum(len(order.get("items") or []) for order in orders)
        completed_courses = sum(1 for order in orders if order.get("status") == COMPLETED_STATUS)
        progress = {
            "totalCourses": total_courses,
            "completedCourses": completed_courses,
            "inProgressCourses": total_courses - completed_courses,
            "completionRate": _rounded_percent(completed_courses, total_courses),
            "totalStudyTime": user.get("totalStudyTime") or 0,
            "averageScore": user.get("averageScore") or 0,
            "certificatesEarned": completed_courses,
        }

        activity = [
            *({"type": "purchase", "title": "Bought a course", "time": o.get("createdAt")} for o in orders),
            *({"type": "forum", "title": "Posted in forum", "time": p.get("createdAt")} for p in posts),
            *({"type": "forum_reply", "title": "Replied in forum", "time": r.get("createdAt")} for r in replies),
        ]
        activity.sort(key=lambda item: as_aware_datetime(item["time"]), reverse=True)

        return {
            "user": {
                "uid": user.get("uid"),
                "email": user.get("email"),
                "name": user.get("name"),
                "joinedDate": user.get("createdAt"),
            },
            "progress": progress,
            "achievements": achievements_for(progress),
            "recentActivity": activity[:RECENT_ACTIVITY_LIMIT],
            "enrolledCourses": serialize_documents(courses),
            "studyStreak": user.get("studyStreak") or 0,
            "weeklyGoals": user.get("weeklyGoals") or DEFAULT_WEEKLY_GOALS,
        }

    async def admin_dashboard(self) -> dict[str, Any]:
        """Platform totals, top spenders and the latest orders."""
        total_users = await user_crud.count(self.db)
        total_courses = await course_crud.count(self.db)
        orders = await order_crud.find_many(self.db)
        transactions = await transaction_crud.find_many(self.db)
        review_documents = await review_crud.find_many(self.db)

        revenue = sum(transaction.get("amount") or 0 for transaction in transactions)
        completed_orders = sum(1 for order in orders if order.get("status") == COMPLETED_STATUS)
        ratings = [
            review.get("rating") or 0
            for document in review_documents
            for review in document.get("reviews") or []
        ]
        avg_rating = math.floor(sum(ratings) / len(ratings) + 0.5) if ratings else 0

        spent_by_email: dict[str, float] = {}
        for order in orders:
            email = order.get("userEmail")
            spent_by_email[email] = spent_by_email.get(email, 0) + (order.get("totalAmount") or 0)
        top_performers = sorted(
            ({"email": email, "spent": spent} for email, spent in spent_by_email.items()),
            key=lambda row: row["spent"],
            reverse=True,
        )[:TOP_SPENDERS_LIMIT]

        recent_orders = sorted(
            orders, key=lambda order: as_aware_datetime(order.get("createdAt")), reverse=True
        )[:RECENT_ORDERS_LIMIT]

        return {
            "stats": {
                "totalUsers": total_users,
                "revenue": revenue,
                "completionRate": _rounded_percent(completed_orders, len(orders)),
                "avgRating": avg_rating,
                "courses": total_courses,
            },
            "topPerformers": top_performers,
            "recentOrders": serialize_documents(recent_orders),
            "systemAlerts": [],
        }
