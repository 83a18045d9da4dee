"""
Objets valeur pour la pagination et le tri des listes exposees au client.

Le sens de tri circule sous deux formes :
- sur le fil (parametre sortDir) : "asc" / "desc"
- en interne cote client pageable : entier signe, -1 pour asc et 1 pour desc

Les conversions dans les deux sens doivent rester exactement symetriques
pour la compatibilite avec les clients existants.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_PAGE_SIZE = 15
MAX_PAGE_SIZE = 250


class SortDirection(str, Enum):
    """Sens de tri, valeur = representation sur le fil."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_wire(cls, value: str) -> "SortDirection":
        """Convertit "asc"/"desc" (insensible a la casse)."""
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError):
            raise ValueError(f"Invalid sort direction: {value!r}") from None

    @classmethod
    def from_numeric(cls, value: int) -> "SortDirection":
        """Convertit l'encodage numerique (-1 => asc, 1 => desc)."""
        if value == -1:
            return cls.ASC
        if value == 1:
            return cls.DESC
        raise ValueError(f"Invalid numeric sort direction: {value!r}")

    def to_wire(self) -> str:
        return self.value

    def to_numeric(self) -> int:
        return -1 if self is SortDirection.ASC else 1

    @property
    def descending(self) -> bool:
        return self is SortDirection.DESC


class SortKey(str, Enum):
    """Champs triables, valeur = nom utilise sur le fil."""

    AIR_DATE = "airDate"
    SERIES_TITLE = "seriesTitle"
    SEASON_NUMBER = "seasonNumber"
    EPISODE_NUMBER = "episodeNumber"
    TITLE = "title"

    @classmethod
    def from_wire(cls, value: str) -> "SortKey":
        """Convertit le nom de champ recu du client."""
        for key in cls:
            if key.value.lower() == value.strip().lower():
                return key
        raise ValueError(f"Invalid sort key: {value!r}")


@dataclass(frozen=True)
class PageRequest:
    """
    Demande de page.

    Attributs :
        page : Index de page (commence a 1)
        page_size : Nombre d'elements par page
        sort_key : Champ de tri
        sort_direction : Sens de tri
        include_specials : Inclure la saison 0 (speciaux)
    """

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_key: SortKey = SortKey.AIR_DATE
    sort_direction: SortDirection = SortDirection.DESC
    include_specials: bool = False

    def bounded(self, max_page_size: int = MAX_PAGE_SIZE) -> "PageRequest":
        """Retourne une copie avec page >= 1 et 1 <= page_size <= max_page_size."""
        return PageRequest(
            page=max(self.page, 1),
            page_size=min(max(self.page_size, 1), max_page_size),
            sort_key=self.sort_key,
            sort_direction=self.sort_direction,
            include_specials=self.include_specials,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class Page:
    """
    Page de resultats.

    total_records est calcule sur l'ensemble filtre, independamment
    de la tranche retournee.
    """

    page: int
    page_size: int
    sort_key: SortKey
    sort_direction: SortDirection
    total_records: int
    records: list[Any] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        if self.total_records == 0:
            return 0
        return (self.total_records + self.page_size - 1) // self.page_size
