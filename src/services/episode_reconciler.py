"""
Reconciliation des episodes d'une serie avec le catalogue TVDB.

Fusionne le snapshot catalogue d'une serie dans les episodes stockes :
- les saisons referencees sont enregistrees avant les episodes
- chaque episode brut est rapproche d'un episode local par sa cle naturelle
  (series_id, season_number, episode_number), puis cree ou mis a jour
- les dates de diffusion anterieures a la date plancher sont ramenees a
  cette date
- l'echec d'un episode est isole : il est journalise, compte, et la
  synchronisation continue avec les suivants
- les insertions et mises a jour sont persistees en deux lots, une fois
  tous les episodes traites

Le champ episode_file_id n'est jamais modifie : les associations de
fichiers survivent aux synchronisations successives.

Un episode renumerote en amont est traite comme un nouvel episode ;
l'ancien enregistrement reste en base.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from loguru import logger as default_logger

from src.config import DEFAULT_AIR_DATE_FLOOR
from src.core.entities.media import Episode, Series
from src.core.ports.catalog import CatalogSnapshot, ICatalogSource, RawEpisode
from src.core.ports.repositories import IRepository
from src.logging_config import run_logger
from src.services.season_registrar import SeasonRegistrar

NaturalKey = tuple[int, int, int]


class RecordProcessingError(Exception):
    """Echec du traitement d'un episode brut (jamais propage hors du run)."""


class RecordOutcome(str, Enum):
    """Resultat du traitement d'un episode brut."""

    NEW = "new"
    UPDATED = "updated"
    FAILED = "failed"


@dataclass(frozen=True)
class RecordResult:
    """Resultat pour un episode brut du snapshot."""

    tvdb_episode_id: Optional[int]
    season_number: Optional[int]
    episode_number: Optional[int]
    outcome: RecordOutcome
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is not RecordOutcome.FAILED


@dataclass
class ReconciliationSummary:
    """Bilan d'une synchronisation de serie."""

    series_id: int
    series_title: str = ""
    results: list[RecordResult] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def failure_count(self) -> int:
        return sum(1 for r in self.results if not r.succeeded)

    @property
    def new_count(self) -> int:
        return sum(1 for r in self.results if r.outcome is RecordOutcome.NEW)

    @property
    def updated_count(self) -> int:
        return sum(1 for r in self.results if r.outcome is RecordOutcome.UPDATED)

    @property
    def failures(self) -> list[RecordResult]:
        return [r for r in self.results if not r.succeeded]


def natural_key(series_id: int, season_number: int, episode_number: int) -> NaturalKey:
    """Cle de rapprochement entre un episode catalogue et un episode local."""
    return (series_id, season_number, episode_number)


def clamp_air_date(value: Optional[date], floor: date) -> date:
    """
    Ramene une date de diffusion a la date plancher si elle est anterieure.

    Une date absente est traitee comme la plus petite date possible.
    L'heure eventuelle est supprimee.
    """
    if value is None:
        return floor
    if isinstance(value, datetime):
        value = value.date()
    return floor if value < floor else value


class EpisodeReconciler:
    """
    Service de synchronisation des episodes d'une serie.

    Le logger est injecte (loguru par defaut) et lie a la serie pour
    chaque execution. Les appelants ne doivent pas lancer deux
    synchronisations simultanees pour une meme serie.
    """

    def __init__(
        self,
        repository: IRepository,
        season_registrar: SeasonRegistrar,
        catalog: ICatalogSource,
        air_date_floor: date = DEFAULT_AIR_DATE_FLOOR,
        logger: Any = None,
    ) -> None:
        self._repository = repository
        self._season_registrar = season_registrar
        self._catalog = catalog
        self._air_date_floor = air_date_floor
        self._logger = logger or default_logger

    async def refresh_episode_info(self, series: Series) -> ReconciliationSummary:
        """
        Synchronise les episodes d'une serie depuis le catalogue.

        Args:
            series: Serie suivie (son id est l'ID catalogue)

        Returns:
            Bilan de la synchronisation

        Raises:
            SourceUnavailableError: Catalogue injoignable (rien n'est modifie)
            SeriesNotFoundError: Serie inconnue du catalogue
            StorageError: Echec d'un des deux lots de persistance
        """
        log = run_logger(self._logger, series_id=series.id)
        log.info(f"Debut de la mise a jour des episodes de la serie {series.id}")

        snapshot = await self._catalog.get_series(series.id, include_episodes=True)
        return self.reconcile(series, snapshot, log)

    def reconcile(
        self,
        series: Series,
        snapshot: CatalogSnapshot,
        log: Any = None,
    ) -> ReconciliationSummary:
        """Fusionne un snapshot deja recupere dans les episodes stockes."""
        log = log or run_logger(self._logger, series_id=series.id)
        summary = ReconciliationSummary(series_id=series.id, series_title=snapshot.series_name)

        log.debug(f"Mise a jour des saisons de {snapshot.series_name}")
        self._register_seasons(series, snapshot, log)

        new_episodes: dict[NaturalKey, Episode] = {}
        updated_episodes: dict[NaturalKey, Episode] = {}

        for raw in snapshot.episodes:
            try:
                key, episode, is_new = self._merge(series, snapshot, raw, new_episodes, updated_episodes, log)
            except Exception as e:
                log.exception(
                    f"Erreur lors de la mise a jour des episodes de la serie {series.id}",
                    tvdb_episode_id=raw.id,
                )
                summary.results.append(self._result(raw, RecordOutcome.FAILED, error=str(e)))
                continue

            if is_new:
                new_episodes[key] = episode
                summary.results.append(self._result(raw, RecordOutcome.NEW))
            else:
                updated_episodes[key] = episode
                summary.results.append(self._result(raw, RecordOutcome.UPDATED))

        self._repository.add_many(list(new_episodes.values()))
        self._repository.update_many(list(updated_episodes.values()))

        log.info(
            f"Fin de la mise a jour des episodes de {snapshot.series_name}. "
            f"Succes: {summary.success_count} - Echecs: {summary.failure_count}",
            success_count=summary.success_count,
            failure_count=summary.failure_count,
            new_count=summary.new_count,
            updated_count=summary.updated_count,
        )
        return summary

    def _register_seasons(self, series: Series, snapshot: CatalogSnapshot, log: Any) -> None:
        seasons = {
            (raw.season_id, raw.season_number)
            for raw in snapshot.episodes
            if raw.season_id is not None and raw.season_number is not None
        }
        for season_id, season_number in sorted(seasons, key=lambda s: (s[1], s[0])):
            self._season_registrar.ensure_season(series.id, season_id, season_number)
        log.debug(f"{len(seasons)} saison(s) verifiee(s)")

    def _merge(
        self,
        series: Series,
        snapshot: CatalogSnapshot,
        raw: RawEpisode,
        new_episodes: dict[NaturalKey, Episode],
        updated_episodes: dict[NaturalKey, Episode],
        log: Any,
    ) -> tuple[NaturalKey, Episode, bool]:
        """
        Calcule l'episode fusionne pour un episode brut.

        Rien n'est modifie tant que la fusion n'est pas complete : la cible
        est une copie, publiee par l'appelant seulement en cas de succes.

        Returns:
            (cle naturelle, episode fusionne, True si nouvel episode)
        """
        if raw.season_id is None:
            raise RecordProcessingError(f"Episode {raw.id} has no season id")
        if raw.season_number is None or raw.episode_number is None:
            raise RecordProcessingError(f"Episode {raw.id} has no season/episode number")

        air_date = clamp_air_date(raw.first_aired, self._air_date_floor)

        log.trace(
            f"Mise a jour de [{snapshot.series_name}] - "
            f"S{raw.season_number}E{raw.episode_number}"
        )

        key = natural_key(series.id, raw.season_number, raw.episode_number)
        target, is_new = self._find_target(key, new_episodes, updated_episodes)

        merged = replace(
            target,
            series_id=series.id,
            tvdb_episode_id=raw.id,
            air_date=air_date,
            episode_number=raw.episode_number,
            season_id=raw.season_id,
            season_number=raw.season_number,
            title=raw.episode_name or "",
            overview=raw.overview,
        )
        return key, merged, is_new

    def _find_target(
        self,
        key: NaturalKey,
        new_episodes: dict[NaturalKey, Episode],
        updated_episodes: dict[NaturalKey, Episode],
    ) -> tuple[Episode, bool]:
        # Doublons dans le snapshot : le dernier episode brut l'emporte
        if key in new_episodes:
            return new_episodes[key], True
        if key in updated_episodes:
            return updated_episodes[key], False

        series_id, season_number, episode_number = key
        existing = self._repository.find_one(
            Episode,
            series_id=series_id,
            season_number=season_number,
            episode_number=episode_number,
        )
        if existing is None:
            return Episode(episode_file_id=0), True
        return existing, False

    @staticmethod
    def _result(raw: RawEpisode, outcome: RecordOutcome, error: Optional[str] = None) -> RecordResult:
        return RecordResult(
            tvdb_episode_id=raw.id,
            season_number=raw.season_number,
            episode_number=raw.episode_number,
            outcome=outcome,
            error=error,
        )
