"""
API Module Initialization
"""

from discussion_web.api.health import router as health_router

__all__ = ["health_router"]
