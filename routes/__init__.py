"""
API route modules.

Each module defines routes for one area of the intake workflow.
"""

from routes.sessions import router as sessions_router
from routes.imports import router as imports_router
from routes.reference import router as reference_router

__all__ = [
    "sessions_router",
    "imports_router",
    "reference_router",
]
