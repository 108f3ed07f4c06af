"""
In-Memory Repository Context

Process-wide store shared by every request when no database is configured.
All access goes through a re-entrant lock, since requests may run on
different threads.
"""

import threading
from typing import Callable, Optional, TypeVar

from discussion_web.domain.entity import Entity
from discussion_web.repositories.base import RepositoryContext

E = TypeVar("E", bound=Entity)
R = TypeVar("R")


class InMemoryRepositoryContext(RepositoryContext):
    """
    In-Memory Repository Context

    Holds one table (id -> entity) and one id sequence per entity type.
    Entities are copied on the way in and out so no caller shares mutable
    state with the store.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tables: dict[type, dict[int, Entity]] = {}
        self._sequences: dict[type, int] = {}

    def _table(self, entity_type: type) -> dict[int, Entity]:
        return self._tables.setdefault(entity_type, {})

    def transaction(self, func: Callable[[], R]) -> R:
        """Run func while holding the store lock."""
        with self._lock:
            return func()

    def next_id(self, entity_type: type) -> int:
        with self._lock:
            value = self._sequences.get(entity_type, 0) + 1
            self._sequences[entity_type] = value
            return value

    def find(self, entity_type: type[E], id: int) -> Optional[E]:
        with self._lock:
            entity = self._table(entity_type).get(id)
            return entity.model_copy(deep=True) if entity is not None else None

    def find_all(self, entity_type: type[E]) -> list[E]:
        with self._lock:
            table = self._table(entity_type)
            return [table[key].model_copy(deep=True) for key in sorted(table)]

    def contains(self, entity_type: type, id: int) -> bool:
        with self._lock:
            return id in self._table(entity_type)

    def store(self, entity: Entity) -> None:
        with self._lock:
            self._table(type(entity))[entity.id] = entity.model_copy(deep=True)

    def remove(self, entity_type: type, id: int) -> bool:
        with self._lock:
            return self._table(entity_type).pop(id, None) is not None

    def count(self, entity_type: type) -> int:
        with self._lock:
            return len(self._table(entity_type))
