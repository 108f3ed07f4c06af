"""
In-Memory Repository Implementation Module Initialization
"""

from discussion_web.repositories.memory.context import InMemoryRepositoryContext
from discussion_web.repositories.memory.repository import InMemoryRepository

__all__ = [
    "InMemoryRepositoryContext",
    "InMemoryRepository",
]
