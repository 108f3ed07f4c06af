"""
Storage Backend Wiring Module

Selects the storage backend once at startup: MongoDB when a connection
string is configured, otherwise a process-wide in-memory store. The selected
backend provides the repository context factory and the generic repository
factory used by request dependencies.
"""

import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

from discussion_web.common.errors import StorageConfigurationError
from discussion_web.config import Settings
from discussion_web.db.mongo import DEFAULT_PROBE_TIMEOUT_MS, database_exists
from discussion_web.repositories.base import Repository, RepositoryContext, T
from discussion_web.repositories.memory import InMemoryRepository, InMemoryRepositoryContext
from discussion_web.repositories.mongo import MongoRepository, MongoRepositoryContext

logger = logging.getLogger(__name__)

DatabaseProbe = Callable[[str, int], Awaitable[bool]]


def has_connection_string(connection_string: Optional[str]) -> bool:
    """Empty and whitespace-only values count as not configured."""
    return bool(connection_string and connection_string.strip())


class StorageBackend(ABC):
    """Storage Backend Interface"""

    name: str
    repository_class: type[Repository]

    @abstractmethod
    async def create_context(self) -> RepositoryContext:
        """Provide the repository context for one unit of work."""
        pass

    async def release_context(self, context: RepositoryContext) -> None:
        """End the unit of work started by create_context."""
        return None

    def create_repository(self, context: RepositoryContext, entity_type: type[T]) -> Repository[T]:
        return self.repository_class(context, entity_type)


class InMemoryStorageBackend(StorageBackend):
    """
    In-Memory Storage Backend

    Every unit of work shares the single context owned by this backend.
    """

    name = "memory"
    repository_class = InMemoryRepository

    def __init__(self, context: Optional[InMemoryRepositoryContext] = None):
        self.context = context if context is not None else InMemoryRepositoryContext()

    async def create_context(self) -> RepositoryContext:
        return self.context


class MongoStorageBackend(StorageBackend):
    """
    MongoDB Storage Backend

    Probes the database before every context is created.
    """

    name = "mongo"
    repository_class = MongoRepository

    def __init__(
        self,
        connection_string: str,
        probe: DatabaseProbe = database_exists,
        probe_timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS,
        context_factory: Callable[[str], MongoRepositoryContext] = MongoRepositoryContext,
    ):
        self.connection_string = connection_string
        self.probe = probe
        self.probe_timeout_ms = probe_timeout_ms
        self.context_factory = context_factory

    async def create_context(self) -> RepositoryContext:
        # TODO: probe once per process instead of per context (one extra round trip per request)
        if not await self.probe(self.connection_string, self.probe_timeout_ms):
            logger.error("MongoDB database not found for the configured connection string")
            raise StorageConfigurationError()
        return self.context_factory(self.connection_string)

    async def release_context(self, context: RepositoryContext) -> None:
        await context.close()


def add_data_services(settings: Settings) -> StorageBackend:
    """
    Select the storage backend for this process

    Args:
        settings: Application settings

    Returns:
        StorageBackend: MongoDB backend when a connection string is set, in-memory otherwise
    """
    connection_string = settings.MONGO_CONNECTION_STRING
    if has_connection_string(connection_string):
        logger.info("Storage backend: MongoDB")
        return MongoStorageBackend(
            connection_string.strip(),
            probe_timeout_ms=settings.MONGO_PROBE_TIMEOUT_MS,
        )

    logger.info("Storage backend: in-memory (no mongoConnectionString configured)")
    return InMemoryStorageBackend()
