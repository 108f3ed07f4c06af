"""
API Dependency Injection Module

Provides the repository dependencies for FastAPI routes.
"""

from typing import Annotated, AsyncGenerator, Callable

from fastapi import Depends, Request

from discussion_web.repositories.base import DataRepository, RepositoryContext, T
from discussion_web.services.storage import StorageBackend


def get_storage_backend(request: Request) -> StorageBackend:
    """Storage backend selected at startup"""
    return request.app.state.storage_backend


StorageBackendDep = Annotated[StorageBackend, Depends(get_storage_backend)]


async def get_repository_context(
    backend: StorageBackendDep,
) -> AsyncGenerator[RepositoryContext, None]:
    """
    Get the repository context for the current request

    Created once per request and released when the request finishes.

    Yields:
        RepositoryContext: Context of the active storage backend

    Raises:
        StorageConfigurationError: Configured database is unreachable
    """
    context = await backend.create_context()
    try:
        yield context
    finally:
        await backend.release_context(context)


RepositoryContextDep = Annotated[RepositoryContext, Depends(get_repository_context)]


def data_repository(entity_type: type[T]) -> Callable[..., DataRepository[T]]:
    """
    Build a dependency providing the generic repository for an entity type

    Example:
        TopicRepository = Annotated[DataRepository[Topic], Depends(data_repository(Topic))]

        @router.get("/topics")
        async def list_topics(topics: TopicRepository):
            return await topics.all()
    """

    def get_data_repository(
        context: RepositoryContextDep, backend: StorageBackendDep
    ) -> DataRepository[T]:
        return DataRepository(backend.create_repository(context, entity_type))

    get_data_repository.__name__ = f"get_{entity_type.__name__.lower()}_repository"
    return get_data_repository
