"""
Test suite for DashboardService.

System role: Verification of dashboard aggregation
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cognition_api.application.services.dashboard_service import DashboardService, achievements_for
from cognition_api.boundary.db.CRUD.commerce_crud import order_crud
from cognition_api.boundary.db.CRUD.course_crud import course_crud
from cognition_api.boundary.db.CRUD.forum_crud import forum_post_crud, forum_reply_crud
from cognition_api.boundary.db.CRUD.review_crud import review_crud
from cognition_api.boundary.db.CRUD.transaction_crud import transaction_crud
from cognition_api.boundary.db.CRUD.user_crud import user_crud
from cognition_api.core.exceptions import UserNotFoundError

T0 = datetime(2024, 5, 1, tzinfo=timezone.utc)


@pytest.fixture
def dashboard_service() -> DashboardService:
    return DashboardService(db=MagicMock())


def test_achievements_follow_thresholds() -> None:
    progress = {"completedCourses": 1, "totalStudyTime": 10, "averageScore": 95}

    names = [achievement["name"] for achievement in achievements_for(progress)]

    assert names == ["First Course", "High Achiever"]


class TestUserDashboard:
    @pytest.mark.asyncio
    async def test_missing_user_is_404(self, dashboard_service) -> None:
        with patch.object(user_crud, "get_by_uid", AsyncMock(return_value=None)):
            with pytest.raises(UserNotFoundError):
                await dashboard_service.user_dashboard("ghost")

    @pytest.mark.asyncio
    async def test_activity_is_newest_first(self, dashboard_service) -> None:
        # Arrange
        user = {"uid": "student-1", "email": "s@example.com", "name": "Sam", "createdAt": T0}
        orders = [
            {"items": [{}, {}], "status": "Completed", "createdAt": T0},
            {"items": [{}], "status": "Confirmed", "createdAt": T0 + timedelta(days=3)},
        ]
        posts = [{"createdAt": T0 + timedelta(days=1)}]
        replies = [{"createdAt": (T0 + timedelta(days=2)).isoformat()}]

        # Act
        with patch.object(user_crud, "get_by_uid", AsyncMock(return_value=user)), \
             patch.object(order_crud, "list_for_user", AsyncMock(return_value=orders)), \
             patch.object(forum_post_crud, "find_many", AsyncMock(return_value=posts)), \
             patch.object(forum_reply_crud, "find_many", AsyncMock(return_value=replies)), \
             patch.object(course_crud, "find_many", AsyncMock(return_value=[])):
            dashboard = await dashboard_service.user_dashboard("student-1")

        # Assert
        assert [item["type"] for item in dashboard["recentActivity"]] == [
            "purchase",
            "forum_reply",
            "forum",
            "purchase",
        ]
        assert dashboard["progress"]["totalCourses"] == 3
        assert dashboard["progress"]["completedCourses"] == 1
        assert dashboard["progress"]["completionRate"] == 33
        assert dashboard["weeklyGoals"] == {"studyHours": {"current": 0, "target": 5}}


@pytest.mark.asyncio
async def test_admin_dashboard_totals(dashboard_service) -> None:
    # Arrange
    orders = [
        {"userEmail": "a@x.co", "totalAmount": 100, "status": "Completed", "createdAt": T0},
        {"userEmail": "b@x.co", "totalAmount": 300, "status": "Confirmed", "createdAt": T0 + timedelta(days=1)},
        {"userEmail": "a@x.co", "totalAmount": 50, "status": "Confirmed", "createdAt": T0 + timedelta(days=2)},
    ]
    reviews = [{"reviews": [{"rating": 5}, {"rating": 4}]}, {"reviews": [{"rating": 4}]}]

    # Act
    with patch.object(user_crud, "count", AsyncMock(return_value=12)), \
         patch.object(course_crud, "count", AsyncMock(return_value=4)), \
         patch.object(order_crud, "find_many", AsyncMock(return_value=orders)), \
         patch.object(transaction_crud, "find_many", AsyncMock(return_value=[{"amount": 150.0}, {"amount": 99.5}])), \
         patch.object(review_crud, "find_many", AsyncMock(return_value=reviews)):
        dashboard = await dashboard_service.admin_dashboard()

    # Assert
    assert dashboard["stats"] == {
        "totalUsers": 12,
        "revenue": 249.5,
        "completionRate": 33,
        "avgRating": 4,
        "courses": 4,
    }
    assert dashboard["topPerformers"][0] == {"email": "b@x.co", "spent": 300}
    assert [order["totalAmount"] for order in dashboard["recentOrders"]] == [50, 300, 100]
