"""
Generic Repository In-Memory Implementation
"""

from typing import Iterable, List, Optional, Union

from discussion_web.common.errors import NotFoundError
from discussion_web.repositories.base import Repository, T, entity_id
from discussion_web.repositories.memory.context import InMemoryRepositoryContext


class InMemoryRepository(Repository[T]):
    """
    Generic Repository In-Memory Implementation

    Stores entities in the shared InMemoryRepositoryContext.
    """

    context: InMemoryRepositoryContext

    def __init__(self, context: InMemoryRepositoryContext, entity_type: type[T]):
        super().__init__(context, entity_type)

    async def get(self, id: int) -> Optional[T]:
        return self.context.find(self.entity_type, id)

    async def get_many(self, ids: Iterable[int]) -> List[T]:
        result = []
        for id in ids:
            entity = self.context.find(self.entity_type, id)
            if entity is not None:
                result.append(entity)
        return result

    async def all(self) -> List[T]:
        return self.context.find_all(self.entity_type)

    async def create(self, entity: T) -> T:
        entity.id = self.context.next_id(self.entity_type)
        self.context.store(entity)
        return entity

    async def update(self, entity: T) -> T:
        def _replace() -> None:
            if entity.id is None or not self.context.contains(self.entity_type, entity.id):
                raise NotFoundError(
                    f"{self.entity_type.__name__} not found",
                    details={"id": entity.id},
                )
            self.context.store(entity)

        self.context.transaction(_replace)
        return entity

    async def delete(self, entity_or_id: Union[T, int]) -> bool:
        id = entity_id(entity_or_id)
        if id is None:
            return False
        return self.context.remove(self.entity_type, id)
