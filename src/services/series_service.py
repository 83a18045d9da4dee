"""
Service de gestion des series suivies.

Ajoute une serie a suivre depuis le catalogue et declenche la
synchronisation de ses episodes (une serie ou toutes les series).
"""

from typing import Any, Callable, Optional

from loguru import logger as default_logger

from src.core.entities.media import Series
from src.core.ports.catalog import (
    ICatalogSource,
    SeriesNotFoundError,
    SourceUnavailableError,
)
from src.core.ports.repositories import IRepository
from src.services.episode_reconciler import EpisodeReconciler, ReconciliationSummary


class SeriesService:
    """
    Service pour suivre des series et synchroniser leurs episodes.

    Les synchronisations de plusieurs series sont sequentielles.
    """

    def __init__(
        self,
        repository: IRepository,
        catalog: ICatalogSource,
        reconciler: EpisodeReconciler,
        logger: Any = None,
    ) -> None:
        self._repository = repository
        self._catalog = catalog
        self._reconciler = reconciler
        self._logger = logger or default_logger

    def get_series(self, series_id: int) -> Optional[Series]:
        return self._repository.get(Series, series_id)

    def list_series(self) -> list[Series]:
        return sorted(self._repository.all(Series), key=lambda s: s.title.lower())

    async def add_series(self, series_id: int) -> Series:
        """
        Suit une nouvelle serie (sans effet si deja suivie).

        Le nom est recupere depuis le catalogue, sans les episodes.

        Raises:
            SeriesNotFoundError: Serie inconnue du catalogue
            SourceUnavailableError: Catalogue injoignable
        """
        existing = self.get_series(series_id)
        if existing is not None:
            return existing

        snapshot = await self._catalog.get_series(series_id, include_episodes=False)
        series = Series(id=series_id, title=snapshot.series_name)
        self._repository.add(series)
        self._logger.info(f"Serie ajoutee: {series.title}", series_id=series_id)
        return series

    async def refresh_series(self, series_id: int, force: bool = False) -> ReconciliationSummary:
        """
        Synchronise les episodes d'une serie suivie.

        Avec force=True, le snapshot en cache est ignore et relu depuis
        le catalogue.

        Raises:
            SeriesNotFoundError: Serie non suivie localement ou inconnue du catalogue
        """
        series = self.get_series(series_id)
        if series is None:
            raise SeriesNotFoundError(series_id)
        if force:
            await self._catalog.invalidate(series_id)
        return await self._reconciler.refresh_episode_info(series)

    async def refresh_all(
        self,
        on_progress: Optional[Callable[[Series, Optional[ReconciliationSummary]], None]] = None,
        force: bool = False,
    ) -> list[ReconciliationSummary]:
        """
        Synchronise toutes les series suivies.

        Une serie dont le catalogue est indisponible est journalisee et
        ignoree ; les erreurs de stockage interrompent le traitement.
        """
        summaries = []
        for series in self.list_series():
            try:
                if force:
                    await self._catalog.invalidate(series.id)
                summary = await self._reconciler.refresh_episode_info(series)
            except (SourceUnavailableError, SeriesNotFoundError) as e:
                self._logger.warning(
                    f"Synchronisation impossible pour {series.title}: {e}",
                    series_id=series.id,
                )
                summary = None
            else:
                summaries.append(summary)
            if on_progress:
                on_progress(series, summary)
        return summaries
