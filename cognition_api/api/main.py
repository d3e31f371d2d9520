"""
FastAPI application with assembled routers.

Initializes the FastAPI app: MongoDB lifecycle, middleware, exception
handlers that render {"error": ...} bodies, the /uploads static mount and
all API routers.

Dependencies: fastapi, uvicorn, motor, cognition_api.api.routers
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from cognition_api.api.deps.dependencies import get_service_cache
from cognition_api.api.routers.router_utils.error_handling import (
    INTERNAL_ERROR_MESSAGE,
    status_code_for,
)
from cognition_api.boundary.db.connection import MongoDatabase
from cognition_api.configs import get_settings
from cognition_api.core.exceptions import CognitionBerriesError
from cognition_api.observability import configure_logging
from cognition_api.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    books_router,
    commerce_router,
    courses_router,
    dashboard_router,
    enrollments_router,
    forum_router,
    health_router,
    images_router,
    live_sessions_router,
    payments_router,
    progress_router,
    reviews_router,
    users_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Connects MongoDB before serving and closes it on shutdown. An
    unreachable database exits the process, except under the test
    environment where the driver error propagates to the caller.
    """
    settings = get_settings()
    database = MongoDatabase(settings.database)

    # Startup
    try:
        await database.connect()
        await database.ensure_collections()
    except PyMongoError as e:
        logger.critical("MongoDB connection failed", extra={"error": str(e)})
        if not settings.is_test:
            raise SystemExit(1) from e
        raise
    app.state.database = database
    Path(settings.server.uploads_dir).mkdir(parents=True, exist_ok=True)

    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    # Trigger property access to load instances
    _ = cache.firebase_client
    _ = cache.paystack_client
    _ = cache.avatar_store
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    database.close()
    cache.clear()
    logger.info("MongoDB connection closed, service cache cleared")


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    if exc.status_code == 404 and message == "Not Found":
        message = "Not found"
    return _error_response(exc.status_code, message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(400, "Invalid request body", details=jsonable_encoder(exc.errors()))


async def application_exception_handler(request: Request, exc: CognitionBerriesError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code == 500:
        logger.error("Unhandled application error", exc_info=exc)
        return _error_response(status_code, INTERNAL_ERROR_MESSAGE)
    return _error_response(status_code, exc.message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return _error_response(500, INTERNAL_ERROR_MESSAGE)


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Cognition Berries API",
        description="Course catalogue, learning progress, community and payments backend",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(CognitionBerriesError, application_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Profile pictures
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.server.uploads_dir, check_dir=False),
        name="uploads",
    )

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(courses_router)
    app.include_router(images_router)
    app.include_router(forum_router)
    app.include_router(reviews_router)
    app.include_router(commerce_router)
    app.include_router(enrollments_router)
    app.include_router(progress_router)
    app.include_router(payments_router)
    app.include_router(dashboard_router)
    app.include_router(books_router)
    app.include_router(live_sessions_router)

    return app


app = create_app()


if __name__ == "__main__":
    server = get_settings().server
    uvicorn.run(
        "cognition_api.api.main:app",
        host=server.host,
        port=server.port,
    )
