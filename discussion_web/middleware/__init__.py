"""
Middleware Module Initialization
"""

from discussion_web.middleware.static_files import StaticFileMiddleware

__all__ = ["StaticFileMiddleware"]
