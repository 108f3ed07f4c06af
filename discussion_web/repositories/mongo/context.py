"""
MongoDB Repository Context

One context per unit of work (request); closing it closes the client.
"""

from typing import Any, Optional

from pymongo import AsyncMongoClient

from discussion_web.db.mongo import create_client
from discussion_web.repositories.base import RepositoryContext

COUNTERS_COLLECTION = "counters"


class MongoRepositoryContext(RepositoryContext):
    """
    MongoDB Repository Context

    Args:
        connection_string: MongoDB URI naming the database
        client: Existing client to use instead of creating one
    """

    def __init__(self, connection_string: str, client: Optional[AsyncMongoClient] = None):
        self.connection_string = connection_string
        self.client = client if client is not None else create_client(connection_string)
        self.database = self.client.get_default_database()

    def collection(self, entity_type: type) -> Any:
        """Collection holding entities of the given type (named after the class)."""
        return self.database[entity_type.__name__]

    @property
    def counters(self) -> Any:
        return self.database[COUNTERS_COLLECTION]

    async def close(self) -> None:
        await self.client.close()
