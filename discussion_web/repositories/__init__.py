"""
Data Access Layer Module Initialization
"""

from discussion_web.repositories.base import DataRepository, Repository, RepositoryContext
from discussion_web.repositories.memory import InMemoryRepository, InMemoryRepositoryContext
from discussion_web.repositories.mongo import MongoRepository, MongoRepositoryContext

__all__ = [
    "DataRepository",
    "Repository",
    "RepositoryContext",
    "InMemoryRepository",
    "InMemoryRepositoryContext",
    "MongoRepository",
    "MongoRepositoryContext",
]
