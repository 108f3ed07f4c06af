"""
Domain Model Module Initialization
"""

from discussion_web.domain.entity import Entity

__all__ = ["Entity"]
