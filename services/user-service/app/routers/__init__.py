"""
API routers for user service endpoints.
"""

from . import health_router, users_router

__all__ = ["users_router", "health_router"]
