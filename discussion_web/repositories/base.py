"""
Base Repository Interface Module

Defines the generic interfaces for data access, decoupling business logic from specific storage backends.
"""

from abc import ABC, abstractmethod
from typing import Generic, Iterable, List, Optional, TypeVar, Union

from discussion_web.domain.entity import Entity

# Define generic type variable
T = TypeVar("T", bound=Entity)


class RepositoryContext(ABC):
    """
    Repository Context Interface

    Opaque handle on a storage backend that repositories are created against.
    """

    async def close(self) -> None:
        """Release resources held by the context (no-op by default)."""
        return None


class Repository(ABC, Generic[T]):
    """
    Base Repository Interface

    Defines standard CRUD operations for one entity type.
    """

    def __init__(self, context: RepositoryContext, entity_type: type[T]):
        self.context = context
        self.entity_type = entity_type

    @abstractmethod
    async def get(self, id: int) -> Optional[T]:
        """Get entity by ID, None if not found."""
        pass

    @abstractmethod
    async def get_many(self, ids: Iterable[int]) -> List[T]:
        """Get the entities that exist among the given IDs."""
        pass

    @abstractmethod
    async def all(self) -> List[T]:
        """List all entities ordered by ID."""
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Insert a new entity and assign its ID."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        """
        Replace an existing entity

        Raises:
            NotFoundError: No entity with this ID exists
        """
        pass

    @abstractmethod
    async def delete(self, entity_or_id: Union[T, int]) -> bool:
        """Delete an entity. Returns True if deleted, False if not found."""
        pass

    async def save(self, entity: T) -> T:
        """Create when the entity has no ID yet, update otherwise."""
        if entity.id is None:
            return await self.create(entity)
        return await self.update(entity)


def entity_id(entity_or_id: Union[Entity, int]) -> Optional[int]:
    if isinstance(entity_or_id, Entity):
        return entity_or_id.id
    return entity_or_id


class DataRepository(Generic[T]):
    """
    Application-facing Generic Repository

    Fronts whichever backend Repository is active, so callers depend on one
    type regardless of the storage selected at startup.
    """

    def __init__(self, repository: Repository[T]):
        self.repository = repository

    @property
    def entity_type(self) -> type[T]:
        return self.repository.entity_type

    async def get(self, id: int) -> Optional[T]:
        return await self.repository.get(id)

    async def get_many(self, ids: Iterable[int]) -> List[T]:
        return await self.repository.get_many(ids)

    async def all(self) -> List[T]:
        return await self.repository.all()

    async def create(self, entity: T) -> T:
        return await self.repository.create(entity)

    async def update(self, entity: T) -> T:
        return await self.repository.update(entity)

    async def save(self, entity: T) -> T:
        return await self.repository.save(entity)

    async def delete(self, entity_or_id: Union[T, int]) -> bool:
        return await self.repository.delete(entity_or_id)
