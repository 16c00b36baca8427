from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, List, Optional, TypeVar

from enterprise_ledger.core.ids import deep_copy, new_id
from enterprise_ledger.state.store import EnterpriseState, EnterpriseStore

T = TypeVar("T")


class BaseRepository:
    """
    Base class for repositories providing common helpers.

    Note:
      Every public repository operation runs inside one store transaction and
      returns deep copies, so callers can never mutate the canonical state.
    """

    def __init__(self, store: EnterpriseStore) -> None:
        self.store = store

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[EnterpriseState]:
        """Open a store transaction and yield the live state."""
        async with self.store.transaction() as state:
            yield state

    async def read(self, select: Callable[[EnterpriseState], T]) -> T:
        """Return a deep copy of whatever ``select`` picks from the live state."""
        async with self.transaction() as state:
            return deep_copy(select(state))

    @staticmethod
    def upsert(collection: List[T], entity: T, prefix: str) -> T:
        """
        Replace the entry whose id matches ``entity.id`` or append ``entity``,
        assigning ``new_id(prefix)`` when it has no id.
        """
        entity_id: Optional[str] = getattr(entity, "id", None)
        if entity_id:
            for index, existing in enumerate(collection):
                if existing.id == entity_id:
                    collection[index] = entity
                    return entity
        else:
            entity.id = new_id(prefix)
        collection.append(entity)
        return entity
