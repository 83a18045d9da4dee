"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web :
repository SQLModel, client TVDB et services de synchronisation.
"""

from datetime import date

from dependency_injector import containers, providers

from .adapters.api.cache import APICache
from .adapters.api.tvdb_client import TVDBClient
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import SQLModelRepository
from .services.episode_reconciler import EpisodeReconciler
from .services.episode_service import EpisodeService
from .services.missing_episodes import MissingEpisodesQuery
from .services.season_registrar import SeasonRegistrar
from .services.series_service import SeriesService


def _build_series_service(
    repository: SQLModelRepository,
    catalog: TVDBClient,
    air_date_floor: date,
) -> SeriesService:
    """
    Assemble le SeriesService autour d'un repository unique.

    Le registrar, le reconciliateur et le service partagent la meme
    session pendant une synchronisation.
    """
    reconciler = EpisodeReconciler(
        repository=repository,
        season_registrar=SeasonRegistrar(repository),
        catalog=catalog,
        air_date_floor=air_date_floor,
    )
    return SeriesService(repository=repository, catalog=catalog, reconciler=reconciler)


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        series_service = container.series_service()
        missing = container.missing_episodes_query()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Repository - Factory pour nouvelle instance avec session fraiche
    repository = providers.Factory(
        SQLModelRepository,
        session=session,
    )

    # Cache API - Singleton pour partage entre executions
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.catalog_cache_dir,
    )

    # Client catalogue - Singleton (un seul pool de connexions HTTP)
    tvdb_client = providers.Singleton(
        TVDBClient,
        api_key=config.provided.tvdb_api_key,
        cache=api_cache,
        language=config.provided.tvdb_language,
        cache_ttl=config.provided.catalog_cache_ttl,
    )

    # Services - Factory car dependent du repository (sessions fraiches)
    season_registrar = providers.Factory(
        SeasonRegistrar,
        repository=repository,
    )

    episode_service = providers.Factory(
        EpisodeService,
        repository=repository,
    )

    missing_episodes_query = providers.Factory(
        MissingEpisodesQuery,
        repository=repository,
        max_page_size=config.provided.max_page_size,
    )

    series_service = providers.Factory(
        _build_series_service,
        repository=repository,
        catalog=tvdb_client,
        air_date_floor=config.provided.air_date_floor,
    )

