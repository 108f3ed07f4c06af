"""
MongoDB Repository Implementation Module Initialization
"""

from discussion_web.repositories.mongo.context import MongoRepositoryContext
from discussion_web.repositories.mongo.repository import MongoRepository

__all__ = [
    "MongoRepositoryContext",
    "MongoRepository",
]
