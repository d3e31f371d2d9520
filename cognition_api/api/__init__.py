"""
HTTP API module.

FastAPI application factory, dependencies and routers.
"""
