"""
Dashboard API endpoints.

Routes: GET /dashboard/user, GET /dashboard/admin (admin)

Dependencies: cognition_api.application.services.dashboard_service
System role: Dashboard aggregation HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends

from cognition_api.api.deps.dependencies import (
    get_current_user,
    get_dashboard_service,
    require_admin,
)
from cognition_api.api.routers.router_utils import handle_service_errors
from cognition_api.application.services.dashboard_service import DashboardService
from cognition_api.models.user import CurrentUser

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/user")
@handle_service_errors
async def user_dashboard(
    user: CurrentUser = Depends(get_current_user),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> dict[str, Any]:
    """
    Learner dashboard: stats, achievements, recent activity and goals.

    Raises:
        HTTPException(404): Caller has no user document
    """
    return await dashboard_service.user_dashboard(user.uid)


@router.get("/admin")
@handle_service_errors
async def admin_dashboard(
    admin: CurrentUser = Depends(require_admin),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> dict[str, Any]:
    return await dashboard_service.admin_dashboard()
