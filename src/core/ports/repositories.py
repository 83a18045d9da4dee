"""
Interface port pour le repository generique.

Interface abstraite (port) definissant le contrat de persistance des entites
du domaine (Series, Season, Episode). Les implementations (adaptateurs)
fournissent les mecanismes de stockage concrets (SQLite via SQLModel,
en memoire pour les tests, etc.).

Les filtres s'expriment de deux facons combinables :
- criteria : egalites sur les champs de l'entite (series_id=42, season_number=1),
  traduites en requete par l'adaptateur quand il le peut
- predicate : fonction appliquee a chaque entite, pour les conditions
  non exprimables par egalite (dates, comparaisons)
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")

Predicate = Callable[[Any], bool]


class StorageError(Exception):
    """
    Erreur levee par un repository quand une operation de stockage echoue.

    Couvre les violations de contrainte et les pertes de connexion.
    L'exception d'origine est conservee dans __cause__.
    """


class IRepository(ABC):
    """
    Interface de stockage generique des entites du domaine.

    Les operations sont parametrees par le type d'entite (Series, Season,
    Episode). Les identifiants sont les ids locaux des entites.
    """

    @abstractmethod
    def get(self, entity_type: type[T], entity_id: int) -> Optional[T]:
        """Recupere une entite par son ID, ou None si absente."""
        ...

    @abstractmethod
    def find_one(
        self,
        entity_type: type[T],
        predicate: Optional[Predicate] = None,
        **criteria: Any,
    ) -> Optional[T]:
        """Recupere la premiere entite correspondant aux filtres, ou None."""
        ...

    @abstractmethod
    def find_many(
        self,
        entity_type: type[T],
        predicate: Optional[Predicate] = None,
        **criteria: Any,
    ) -> list[T]:
        """Liste les entites correspondant aux filtres."""
        ...

    @abstractmethod
    def all(self, entity_type: type[T]) -> list[T]:
        """Liste toutes les entites d'un type."""
        ...

    @abstractmethod
    def add(self, entity: Any) -> int:
        """
        Insere une entite et retourne son ID.

        L'ID est aussi affecte a l'entite passee en parametre.
        """
        ...

    @abstractmethod
    def add_many(self, entities: Iterable[Any]) -> None:
        """Insere plusieurs entites en un seul lot."""
        ...

    @abstractmethod
    def update(self, entity: Any) -> None:
        """Met a jour une entite existante (identifiee par son ID)."""
        ...

    @abstractmethod
    def update_many(self, entities: Iterable[Any]) -> None:
        """Met a jour plusieurs entites en un seul lot."""
        ...

    @abstractmethod
    def delete_by_id(self, entity_type: type[T], entity_id: int) -> None:
        """Supprime une entite par son ID (sans effet si absente)."""
        ...
