"""
Shared plumbing for the command-line scripts.

Loads .env, configures logging and hands a connected database to the
script body, closing the client afterwards.
"""

import asyncio
from typing import Any, Awaitable, Callable

from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db.connection import MongoDatabase
from cognition_api.configs import get_settings
from cognition_api.observability import configure_logging


def run_with_database(body: Callable[[AsyncIOMotorDatabase], Awaitable[Any]]) -> Any:
    """Run an async script body against the configured MongoDB."""
    load_dotenv()
    settings = get_settings()
    configure_logging(settings.log_level)

    async def _main() -> Any:
        database = MongoDatabase(settings.database)
        try:
            return await body(await database.connect())
        finally:
            database.close()

    return asyncio.run(_main())
