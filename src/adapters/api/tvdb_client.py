"""
Client TVDB API v3, source catalogue des series TV.

Implemente ICatalogSource pour recuperer le nom et la liste complete des
episodes d'une serie depuis TVDB. Gere l'authentification JWT, le caching
des snapshots et le retry automatiquement.

Les erreurs de transport et les reponses invalides sont traduites en
SourceUnavailableError, les 404 en SeriesNotFoundError.

Reference API: https://api.thetvdb.com/swagger
"""

from datetime import date, datetime, timedelta
from typing import Any, Optional

import httpx
from loguru import logger

from src.adapters.api.cache import APICache
from src.adapters.api.retry import RateLimitError, request_with_retry
from src.core.ports.catalog import (
    CatalogSnapshot,
    ICatalogSource,
    RawEpisode,
    SeriesNotFoundError,
    SourceUnavailableError,
)


class TVDBClient(ICatalogSource):
    """
    Client TVDB pour la synchronisation des episodes.

    Utilise l'API TVDB v3 avec authentification JWT. Le token est obtenu
    automatiquement a la premiere requete et rafraichi avant expiration.

    Example:
        cache = APICache(cache_dir=".cache/api")
        client = TVDBClient(api_key="your-api-key", cache=cache)
        snapshot = await client.get_series(81189)
        await client.close()
    """

    BASE_URL = "https://api.thetvdb.com"

    def __init__(
        self,
        api_key: Optional[str],
        cache: Optional[APICache] = None,
        language: str = "en",
        cache_ttl: int = APICache.DEFAULT_TTL,
        max_attempts: int = 5,
    ) -> None:
        """
        Initialise le client TVDB.

        Args:
            api_key: Cle API TVDB (None = client desactive)
            cache: Cache des snapshots (None = pas de cache)
            language: Langue demandee pour les titres (Accept-Language)
            cache_ttl: Duree de vie des snapshots en secondes (0 = pas de cache)
            max_attempts: Tentatives par requete sur erreur transitoire
        """
        self._api_key = api_key
        self._cache = cache
        self._language = language
        self._cache_ttl = cache_ttl
        self._max_attempts = max_attempts
        self._token: Optional[str] = None
        self._token_expiry: Optional[datetime] = None
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP unique (connection pooling)."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                timeout=httpx.Timeout(30.0, connect=10.0),
            )
        return self._client

    async def _ensure_token(self) -> str:
        """
        S'assure qu'un token JWT valide est disponible.

        Le token TVDB v3 est valide 24h, on le rafraichit apres 23h.
        """
        if self._token and self._token_expiry and datetime.now() < self._token_expiry:
            return self._token

        if not self._api_key:
            raise SourceUnavailableError("TVDB API key is not configured")

        client = await self._get_client()
        response = await client.post("/login", json={"apikey": self._api_key})
        response.raise_for_status()
        data = response.json()

        self._token = data["token"]
        self._token_expiry = datetime.now() + timedelta(hours=23)
        return self._token

    def _get_auth_headers(self) -> dict[str, str]:
        if not self._token:
            raise RuntimeError("Token not available. Call _ensure_token() first.")
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept-Language": self._language,
        }

    async def get_series(
        self,
        series_id: int,
        include_episodes: bool = True,
    ) -> CatalogSnapshot:
        """
        Recupere le snapshot d'une serie.

        Verifie le cache avant d'appeler l'API.

        Args:
            series_id: ID TVDB de la serie
            include_episodes: Recuperer aussi tous les episodes (pagines)

        Returns:
            CatalogSnapshot avec le nom de la serie et ses episodes

        Raises:
            SeriesNotFoundError: TVDB retourne 404
            SourceUnavailableError: Erreur reseau, HTTP ou reponse invalide
        """
        cache_key = self._cache_key(series_id, include_episodes)
        if self._cache is not None and self._cache_ttl > 0:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Snapshot TVDB en cache pour la serie {series_id}")
                return cached

        try:
            await self._ensure_token()
            series = await self._fetch_series(series_id)
            episodes = await self._fetch_episodes(series_id) if include_episodes else []
            snapshot = CatalogSnapshot(
                series_id=series_id,
                series_name=series.get("seriesName") or "",
                episodes=tuple(self._to_raw_episode(item) for item in episodes),
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise SeriesNotFoundError(series_id) from e
            raise SourceUnavailableError(
                f"TVDB returned HTTP {e.response.status_code} for series {series_id}"
            ) from e
        except (httpx.HTTPError, RateLimitError) as e:
            raise SourceUnavailableError(f"TVDB is unreachable: {e}") from e
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise SourceUnavailableError(f"Malformed TVDB response: {e!r}") from e

        logger.debug(
            f"Snapshot TVDB recupere: {snapshot.series_name}",
            series_id=series_id,
            episodes=len(snapshot.episodes),
        )

        if self._cache is not None and self._cache_ttl > 0:
            await self._cache.set(cache_key, snapshot, ttl=self._cache_ttl)
        return snapshot

    async def invalidate(self, series_id: int) -> None:
        """Supprime les snapshots en cache d'une serie (avec et sans episodes)."""
        if self._cache is None:
            return
        for include_episodes in (True, False):
            await self._cache.delete(self._cache_key(series_id, include_episodes))
        logger.debug(f"Snapshots TVDB invalides pour la serie {series_id}")

    @staticmethod
    def _cache_key(series_id: int, include_episodes: bool) -> str:
        return f"tvdb:snapshot:{series_id}:{int(include_episodes)}"

    async def _fetch_series(self, series_id: int) -> dict[str, Any]:
        client = await self._get_client()
        response = await request_with_retry(
            client,
            "GET",
            f"/series/{series_id}",
            max_attempts=self._max_attempts,
            headers=self._get_auth_headers(),
        )
        data = response.json()["data"]
        if not isinstance(data, dict):
            raise TypeError("series payload is not an object")
        return data

    async def _fetch_episodes(self, series_id: int) -> list[dict[str, Any]]:
        """
        Recupere tous les episodes d'une serie (100 par page).

        Suit links.next jusqu'a la derniere page.
        """
        client = await self._get_client()
        episodes: list[dict[str, Any]] = []
        page: Optional[int] = 1

        while page is not None:
            response = await request_with_retry(
                client,
                "GET",
                f"/series/{series_id}/episodes",
                max_attempts=self._max_attempts,
                params={"page": str(page)},
                headers=self._get_auth_headers(),
            )
            data = response.json()
            items = data.get("data") or []
            if not isinstance(items, list):
                raise TypeError("episodes payload is not a list")
            episodes.extend(items)
            page = (data.get("links") or {}).get("next")

        return episodes

    @staticmethod
    def _to_raw_episode(item: dict[str, Any]) -> RawEpisode:
        """Convertit un episode TVDB v3 en episode brut."""
        if not isinstance(item, dict):
            raise TypeError(f"episode payload is not an object: {item!r}")
        return RawEpisode(
            id=item.get("id"),
            season_id=item.get("airedSeasonID"),
            season_number=item.get("airedSeason"),
            episode_number=item.get("airedEpisodeNumber"),
            first_aired=_parse_date(item.get("firstAired")),
            episode_name=item.get("episodeName") or "",
            overview=item.get("overview"),
        )

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tvdb"

    async def close(self) -> None:
        """Ferme le client HTTP et libere les ressources."""
        if self._client:
            await self._client.aclose()
            self._client = None


def _parse_date(value: Optional[str]) -> Optional[date]:
    """Parse une date TVDB (YYYY-MM-DD). Vide ou invalide -> None."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        logger.debug(f"Date TVDB invalide ignoree: {value!r}")
        return None
