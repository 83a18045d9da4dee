"""
Implementation en memoire du repository generique.

Utilisee par les tests et pour les executions sans base de donnees.
Reproduit les garanties du stockage SQLite : IDs generes a l'insertion,
contraintes d'unicite, copies isolees (une entite lue puis modifiee n'est
pas persistee tant que update() n'est pas appele).
"""

from collections.abc import Iterable
from dataclasses import replace
from itertools import count
from typing import Any, Optional, TypeVar

from src.core.entities.media import Episode, Season, Series
from src.core.ports.repositories import IRepository, Predicate, StorageError

T = TypeVar("T")

# Memes contraintes que les tables SQLModel
_UNIQUE_KEYS: dict[type, tuple[str, ...]] = {
    Season: ("series_id", "season_number"),
    Episode: ("series_id", "season_number", "episode_number"),
}

# Types dont l'ID est fourni par l'appelant (ID catalogue)
_EXTERNAL_IDS = frozenset({Series})


class InMemoryRepository(IRepository):
    """Repository stockant des copies des entites dans des dictionnaires."""

    def __init__(self) -> None:
        self._tables: dict[type, dict[int, Any]] = {}
        self._sequences: dict[type, count] = {}

    def _table(self, entity_type: type) -> dict[int, Any]:
        return self._tables.setdefault(entity_type, {})

    def _next_id(self, entity_type: type) -> int:
        return next(self._sequences.setdefault(entity_type, count(1)))

    def _unique_key(self, entity: Any) -> Optional[tuple]:
        names = _UNIQUE_KEYS.get(type(entity))
        if names is None:
            return None
        return tuple(getattr(entity, name) for name in names)

    def _check_unique(self, entity: Any, pending: Iterable[Any] = ()) -> None:
        key = self._unique_key(entity)
        if key is None:
            return
        for other in [*self._table(type(entity)).values(), *pending]:
            if other is entity or (entity.id is not None and other.id == entity.id):
                continue
            if self._unique_key(other) == key:
                raise StorageError(
                    f"UNIQUE constraint failed for {type(entity).__name__} {key}"
                )

    @staticmethod
    def _matches(entity: Any, predicate: Optional[Predicate], criteria: dict[str, Any]) -> bool:
        for name, value in criteria.items():
            if getattr(entity, name) != value:
                return False
        return predicate is None or bool(predicate(entity))

    def get(self, entity_type: type[T], entity_id: int) -> Optional[T]:
        stored = self._table(entity_type).get(entity_id)
        return replace(stored) if stored is not None else None

    def find_one(
        self,
        entity_type: type[T],
        predicate: Optional[Predicate] = None,
        **criteria: Any,
    ) -> Optional[T]:
        matches = self.find_many(entity_type, predicate, **criteria)
        return matches[0] if matches else None

    def find_many(
        self,
        entity_type: type[T],
        predicate: Optional[Predicate] = None,
        **criteria: Any,
    ) -> list[T]:
        table = self._table(entity_type)
        return [
            replace(table[entity_id])
            for entity_id in sorted(table)
            if self._matches(table[entity_id], predicate, criteria)
        ]

    def all(self, entity_type: type[T]) -> list[T]:
        return self.find_many(entity_type)

    def add(self, entity: Any) -> int:
        self.add_many([entity])
        return entity.id

    def add_many(self, entities: Iterable[Any]) -> None:
        pending = list(entities)
        # Validation du lot complet avant toute insertion
        staged: list[Any] = []
        for entity in pending:
            entity_type = type(entity)
            if entity_type in _EXTERNAL_IDS:
                if entity.id is None:
                    raise StorageError(f"{entity_type.__name__} requires an id")
                if entity.id in self._table(entity_type) or any(
                    type(s) is entity_type and s.id == entity.id for s in staged
                ):
                    raise StorageError(
                        f"UNIQUE constraint failed for {entity_type.__name__} {entity.id}"
                    )
            self._check_unique(entity, [s for s in staged if type(s) is entity_type])
            staged.append(entity)

        for entity in staged:
            entity_type = type(entity)
            if entity_type not in _EXTERNAL_IDS:
                entity.id = self._next_id(entity_type)
            self._table(entity_type)[entity.id] = replace(entity)

    def update(self, entity: Any) -> None:
        self.update_many([entity])

    def update_many(self, entities: Iterable[Any]) -> None:
        pending = list(entities)
        for entity in pending:
            if entity.id not in self._table(type(entity)):
                raise StorageError(f"{type(entity).__name__} {entity.id} does not exist")
            self._check_unique(entity)
        for entity in pending:
            self._table(type(entity))[entity.id] = replace(entity)

    def delete_by_id(self, entity_type: type[T], entity_id: int) -> None:
        self._table(entity_type).pop(entity_id, None)
