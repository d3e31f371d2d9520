"""MongoDB access layer: connection, collection names, id helpers and CRUD."""

from cognition_api.boundary.db.connection import MongoDatabase, get_database

__all__ = ["MongoDatabase", "get_database"]
