"""
Generic Repository MongoDB Implementation

Entities are stored with their ID as ``_id``; new IDs come from an atomic
per-collection counter.
"""

from typing import Any, Iterable, List, Optional, Union

from pymongo import ASCENDING, ReturnDocument

from discussion_web.common.errors import NotFoundError
from discussion_web.repositories.base import Repository, T, entity_id
from discussion_web.repositories.mongo.context import MongoRepositoryContext


class MongoRepository(Repository[T]):
    """
    Generic Repository MongoDB Implementation
    """

    context: MongoRepositoryContext

    def __init__(self, context: MongoRepositoryContext, entity_type: type[T]):
        super().__init__(context, entity_type)
        self.collection = context.collection(entity_type)

    def _to_document(self, entity: T) -> dict[str, Any]:
        document = entity.model_dump(mode="json", exclude={"id"})
        document["_id"] = entity.id
        return document

    def _to_domain(self, document: dict[str, Any]) -> T:
        data = dict(document)
        data["id"] = data.pop("_id")
        return self.entity_type.model_validate(data)

    async def _next_id(self) -> int:
        counter = await self.context.counters.find_one_and_update(
            {"_id": self.collection.name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return counter["seq"]

    async def get(self, id: int) -> Optional[T]:
        document = await self.collection.find_one({"_id": id})
        return self._to_domain(document) if document is not None else None

    async def get_many(self, ids: Iterable[int]) -> List[T]:
        cursor = self.collection.find({"_id": {"$in": list(ids)}}).sort("_id", ASCENDING)
        return [self._to_domain(document) async for document in cursor]

    async def all(self) -> List[T]:
        cursor = self.collection.find({}).sort("_id", ASCENDING)
        return [self._to_domain(document) async for document in cursor]

    async def create(self, entity: T) -> T:
        entity.id = await self._next_id()
        await self.collection.insert_one(self._to_document(entity))
        return entity

    async def update(self, entity: T) -> T:
        result = None
        if entity.id is not None:
            result = await self.collection.replace_one({"_id": entity.id}, self._to_document(entity))
        if result is None or result.matched_count == 0:
            raise NotFoundError(
                f"{self.entity_type.__name__} not found",
                details={"id": entity.id},
            )
        return entity

    async def delete(self, entity_or_id: Union[T, int]) -> bool:
        id = entity_id(entity_or_id)
        if id is None:
            return False
        result = await self.collection.delete_one({"_id": id})
        return result.deleted_count > 0
