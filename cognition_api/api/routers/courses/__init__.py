"""
Courses router package.

Exports the router for course management and course image endpoints.
"""

from .courses_router import router

__all__ = ["router"]
