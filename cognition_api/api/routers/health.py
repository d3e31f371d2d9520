"""
Health check API endpoints.

Routes: GET /, GET /health, GET /health/db

Dependencies: cognition_api.boundary.db
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from cognition_api.api.deps.dependencies import get_settings_dependency
from cognition_api.configs import Settings


class InfoResponse(BaseModel):
    """Service banner."""

    message: str
    env: str


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(tags=["health"])


@router.get("/", response_model=InfoResponse)
async def info(settings: Settings = Depends(get_settings_dependency)) -> InfoResponse:
    return InfoResponse(message="Cognition Berries API", env=settings.environment)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/health/db", response_model=HealthResponse)
async def health_check_db(request: Request) -> HealthResponse:
    """Database health check."""
    if await request.app.state.database.ping():
        return HealthResponse(status="healthy", message="Database connection OK")
    return HealthResponse(status="unhealthy", message="Database unreachable")
