# 📄 File: app/modules/authentication/infrastructure/memory/store.py
# 🧭 Purpose (Layman Explanation):
# A small in-memory table shared by the memory repositories. It hands out copies so
# nobody can change stored data behind the repository's back.
# 🧪 Purpose (Technical Summary):
# Dict-backed entity store guarded by an asyncio.Lock, with deep-copy snapshots and a
# version compare-and-swap check for updates.
# 🔗 Dependencies:
# asyncio, typing, domain base model, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# memory/user_repository.py, memory/session_repository.py,
# memory/verification_code_repository.py

import asyncio
from typing import Callable, Dict, Generic, Iterator, TypeVar

from app.modules.authentication.domain.models import AggregateRoot
from app.shared.core.exceptions import ConcurrentModificationError, DomainError, RepositoryError

EntityT = TypeVar("EntityT", bound=AggregateRoot)


class InMemoryStore(Generic[EntityT]):
    """
    Entity table for the in-memory repositories.

    Callers must hold ``lock`` around any read-check-write sequence.
    """

    def __init__(self, entity_name: str, not_found: Callable[[], DomainError]):
        self.entity_name = entity_name
        self.not_found = not_found
        self.items: Dict[str, EntityT] = {}
        self.lock = asyncio.Lock()

    def snapshot(self, entity: EntityT) -> EntityT:
        """Detached copy marked as persisted at its current version."""
        copy = entity.model_copy(deep=True)
        copy.mark_persisted()
        return copy

    def values(self) -> Iterator[EntityT]:
        return iter(list(self.items.values()))

    def insert(self, entity: EntityT) -> EntityT:
        if entity.id in self.items:
            raise RepositoryError(
                f"{self.entity_name} {entity.id} already exists",
                operation="insert",
                entity=self.entity_name,
            )
        self.items[entity.id] = entity.model_copy(deep=True)
        entity.mark_persisted()
        return entity

    def check_version(self, entity: EntityT) -> EntityT:
        """
        Return the stored row if it still has the version the entity expects.

        Raises:
            DomainError: The store's not-found error if the id is unknown
            ConcurrentModificationError: If another writer got there first
        """
        stored = self.items.get(entity.id)
        if stored is None:
            raise self.not_found()
        expected = entity.expected_version()
        if stored.version != expected:
            raise ConcurrentModificationError(self.entity_name, entity.id, expected)
        return stored

    def replace(self, entity: EntityT) -> EntityT:
        self.items[entity.id] = entity.model_copy(deep=True)
        entity.mark_persisted()
        return entity
