"""
Enregistrement des saisons d'une serie.

Une saison doit exister localement avant que les episodes qui la
referencent soient persistes. L'enregistrement est idempotent et ne fait
jamais de mise a jour : le season_id catalogue d'une saison deja connue
n'est pas reconcilie.
"""

from typing import Any, Optional

from loguru import logger as default_logger

from src.core.entities.media import Season
from src.core.ports.repositories import IRepository


class SeasonRegistrar:
    """Insere les saisons absentes, unique par (series_id, season_number)."""

    def __init__(self, repository: IRepository, logger: Any = None) -> None:
        self._repository = repository
        self._logger = logger or default_logger

    def ensure_season(self, series_id: int, season_id: int, season_number: int) -> bool:
        """
        Cree la saison si elle n'existe pas encore.

        Args:
            series_id: ID de la serie
            season_id: ID catalogue de la saison
            season_number: Numero de la saison

        Returns:
            True si la saison a ete creee, False si elle existait deja
        """
        existing = self.get_season(series_id, season_number)
        if existing is not None:
            if existing.season_id != season_id:
                self._logger.debug(
                    f"Saison S{season_number:02d} deja enregistree avec un autre ID catalogue",
                    series_id=series_id,
                    known_season_id=existing.season_id,
                    season_id=season_id,
                )
            return False

        self._repository.add(
            Season(series_id=series_id, season_id=season_id, season_number=season_number)
        )
        self._logger.debug(
            f"Nouvelle saison S{season_number:02d}",
            series_id=series_id,
            season_id=season_id,
        )
        return True

    def get_season(self, series_id: int, season_number: int) -> Optional[Season]:
        return self._repository.find_one(
            Season, series_id=series_id, season_number=season_number
        )

    def get_seasons(self, series_id: int) -> list[Season]:
        """Liste les saisons d'une serie, par numero croissant."""
        seasons = self._repository.find_many(Season, series_id=series_id)
        return sorted(seasons, key=lambda s: s.season_number)
