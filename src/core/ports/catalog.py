"""
Interface port pour la source catalogue externe.

Interface abstraite (port) definissant le contrat d'acces aux metadonnees
des series TV depuis un catalogue externe. L'implementation concrete
(TVDBClient) se trouve dans adapters/api/.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Optional


class SourceUnavailableError(Exception):
    """
    Le catalogue externe est injoignable ou a retourne un snapshot invalide.

    Interrompt la synchronisation en cours, sans retry a ce niveau.
    """


class SeriesNotFoundError(Exception):
    """La serie demandee n'existe pas (catalogue ou base locale)."""

    def __init__(self, series_id: int) -> None:
        self.series_id = series_id
        super().__init__(f"Series not found: {series_id}")


@dataclass(frozen=True)
class RawEpisode:
    """
    Episode brut tel que retourne par le catalogue.

    Attributs :
        id : ID de l'episode dans le catalogue
        season_id : ID de la saison dans le catalogue (None si absent)
        season_number : Numero de saison (0 pour les speciaux)
        episode_number : Numero d'episode dans la saison
        first_aired : Date de premiere diffusion (None si inconnue)
        episode_name : Titre de l'episode
        overview : Resume de l'episode
    """

    id: Optional[int]
    season_id: Optional[int]
    season_number: Optional[int]
    episode_number: Optional[int]
    first_aired: Optional[date] = None
    episode_name: str = ""
    overview: Optional[str] = None


@dataclass(frozen=True)
class CatalogSnapshot:
    """
    Etat complet d'une serie dans le catalogue a un instant donne.

    Attributs :
        series_id : ID catalogue de la serie
        series_name : Nom d'affichage de la serie
        episodes : Episodes bruts dans l'ordre du catalogue
    """

    series_id: int
    series_name: str
    episodes: tuple[RawEpisode, ...] = field(default_factory=tuple)


class ICatalogSource(ABC):
    """
    Interface d'acces au catalogue de metadonnees TV.

    Les implementations gerent le transport (HTTP, cache, retry) et
    traduisent leurs erreurs en SourceUnavailableError / SeriesNotFoundError.
    """

    @abstractmethod
    async def get_series(
        self,
        series_id: int,
        include_episodes: bool = True,
    ) -> CatalogSnapshot:
        """
        Recupere le snapshot d'une serie.

        Args :
            series_id : ID catalogue de la serie
            include_episodes : Si False, le snapshot ne contient que le nom

        Retourne :
            Le snapshot de la serie

        Leve :
            SeriesNotFoundError : Serie inconnue du catalogue
            SourceUnavailableError : Catalogue injoignable ou reponse invalide
        """
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant de la source (ex: 'tvdb')."""
        ...

    async def invalidate(self, series_id: int) -> None:
        """
        Oublie les donnees memorisees pour une serie.

        Sans effet pour une source sans cache. Appele avant une
        synchronisation forcee.
        """
