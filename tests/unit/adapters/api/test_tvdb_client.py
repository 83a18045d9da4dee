"""
Tests for TVDB API client.

Uses respx to mock HTTP requests and test the full client behavior
including authentication, episode pagination, error translation and
snapshot caching.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import respx

from src.adapters.api.cache import APICache
from src.adapters.api.tvdb_client import TVDBClient
from src.core.ports.catalog import (
    CatalogSnapshot,
    ICatalogSource,
    SeriesNotFoundError,
    SourceUnavailableError,
)
from tests.fixtures.tvdb_responses import (
    TVDB_EPISODES_PAGE_1,
    TVDB_EPISODES_PAGE_2,
    TVDB_LOGIN_RESPONSE,
    TVDB_SERIES_NOT_FOUND_RESPONSE,
    TVDB_SERIES_RESPONSE,
)

BASE = "https://api.thetvdb.com"


@pytest.fixture
def mock_cache() -> MagicMock:
    """Mock APICache for testing."""
    cache = MagicMock(spec=APICache)
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock()
    cache.delete = AsyncMock()
    return cache


@pytest.fixture
def api_key() -> str:
    """Test API key."""
    return "test-api-key-12345"


def _mock_login(router=respx) -> respx.Route:
    return router.post(f"{BASE}/login").mock(
        return_value=httpx.Response(200, json=TVDB_LOGIN_RESPONSE)
    )


def _mock_episodes(series_id: int = 81189, router=respx) -> respx.Route:
    return router.get(f"{BASE}/series/{series_id}/episodes").mock(
        side_effect=[
            httpx.Response(200, json=TVDB_EPISODES_PAGE_1),
            httpx.Response(200, json=TVDB_EPISODES_PAGE_2),
        ]
    )


class TestTVDBClientContract:
    """Test that TVDBClient implements the catalog port."""

    def test_client_is_catalog_source(self, api_key: str) -> None:
        client = TVDBClient(api_key=api_key)
        assert isinstance(client, ICatalogSource)
        assert client.source == "tvdb"


class TestTVDBClientAuthentication:
    """Test TVDB JWT authentication."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_login_obtains_jwt_token(self, api_key: str) -> None:
        """The client should POST to /login with the API key and send the token."""
        login_route = _mock_login()
        series_route = respx.get(f"{BASE}/series/81189").mock(
            return_value=httpx.Response(200, json=TVDB_SERIES_RESPONSE)
        )

        client = TVDBClient(api_key=api_key)
        try:
            await client.get_series(81189, include_episodes=False)
        finally:
            await client.close()

        assert login_route.called
        assert api_key.encode() in login_route.calls[0].request.content
        auth = series_route.calls[0].request.headers["Authorization"]
        assert auth == f"Bearer {TVDB_LOGIN_RESPONSE['token']}"

    @pytest.mark.asyncio
    @respx.mock
    async def test_token_is_reused(self, api_key: str) -> None:
        login_route = _mock_login()
        respx.get(f"{BASE}/series/81189").mock(
            return_value=httpx.Response(200, json=TVDB_SERIES_RESPONSE)
        )

        client = TVDBClient(api_key=api_key)
        try:
            await client.get_series(81189, include_episodes=False)
            await client.get_series(81189, include_episodes=False)
        finally:
            await client.close()

        assert login_route.call_count == 1

    @pytest.mark.asyncio
    async def test_missing_api_key_is_unavailable(self) -> None:
        client = TVDBClient(api_key=None)
        with pytest.raises(SourceUnavailableError):
            await client.get_series(81189)


class TestTVDBClientGetSeries:
    """Test snapshot retrieval."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_series_follows_episode_pages(self, api_key: str) -> None:
        """Episodes are collected from every page until links.next is null."""
        _mock_login()
        respx.get(f"{BASE}/series/81189").mock(
            return_value=httpx.Response(200, json=TVDB_SERIES_RESPONSE)
        )
        episodes_route = _mock_episodes()

        client = TVDBClient(api_key=api_key)
        try:
            snapshot = await client.get_series(81189)
        finally:
            await client.close()

        assert isinstance(snapshot, CatalogSnapshot)
        assert snapshot.series_id == 81189
        assert snapshot.series_name == "Breaking Bad"
        assert len(snapshot.episodes) == 3
        assert episodes_route.call_count == 2
        assert episodes_route.calls[1].request.url.params["page"] == "2"

    @pytest.mark.asyncio
    @respx.mock
    async def test_episode_fields_are_mapped(self, api_key: str) -> None:
        _mock_login()
        respx.get(f"{BASE}/series/81189").mock(
            return_value=httpx.Response(200, json=TVDB_SERIES_RESPONSE)
        )
        _mock_episodes()

        client = TVDBClient(api_key=api_key)
        try:
            snapshot = await client.get_series(81189)
        finally:
            await client.close()

        pilot = snapshot.episodes[0]
        assert pilot.id == 349232
        assert pilot.season_id == 30272
        assert pilot.season_number == 1
        assert pilot.episode_number == 1
        assert pilot.first_aired == date(2008, 1, 20)
        assert pilot.episode_name == "Pilot"

        special = snapshot.episodes[2]
        assert special.season_number == 0
        assert special.first_aired is None
        assert special.overview is None

    @pytest.mark.asyncio
    @respx.mock(assert_all_called=False)
    async def test_without_episodes_skips_episode_endpoint(
        self, respx_mock: respx.Router, api_key: str
    ) -> None:
        _mock_login(respx_mock)
        respx_mock.get(f"{BASE}/series/81189").mock(
            return_value=httpx.Response(200, json=TVDB_SERIES_RESPONSE)
        )
        episodes_route = respx_mock.get(f"{BASE}/series/81189/episodes")

        client = TVDBClient(api_key=api_key)
        try:
            snapshot = await client.get_series(81189, include_episodes=False)
        finally:
            await client.close()

        assert snapshot.episodes == ()
        assert not episodes_route.called


class TestTVDBClientErrors:
    """Test error translation to catalog errors."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_404_raises_series_not_found(self, api_key: str) -> None:
        _mock_login()
        respx.get(f"{BASE}/series/999999").mock(
            return_value=httpx.Response(404, json=TVDB_SERIES_NOT_FOUND_RESPONSE)
        )

        client = TVDBClient(api_key=api_key)
        try:
            with pytest.raises(SeriesNotFoundError) as exc_info:
                await client.get_series(999999)
        finally:
            await client.close()

        assert exc_info.value.series_id == 999999

    @pytest.mark.asyncio
    @respx.mock
    async def test_500_raises_source_unavailable(self, api_key: str) -> None:
        _mock_login()
        respx.get(f"{BASE}/series/81189").mock(
            return_value=httpx.Response(500, text="Internal Server Error")
        )

        client = TVDBClient(api_key=api_key)
        try:
            with pytest.raises(SourceUnavailableError):
                await client.get_series(81189)
        finally:
            await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_login_rejected_is_unavailable(self, api_key: str) -> None:
        respx.post(f"{BASE}/login").mock(return_value=httpx.Response(401, json={"Error": "Not Authorized"}))

        client = TVDBClient(api_key=api_key)
        try:
            with pytest.raises(SourceUnavailableError):
                await client.get_series(81189)
        finally:
            await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_payload_is_unavailable(self, api_key: str) -> None:
        _mock_login()
        respx.get(f"{BASE}/series/81189").mock(
            return_value=httpx.Response(200, json={"unexpected": True})
        )

        client = TVDBClient(api_key=api_key)
        try:
            with pytest.raises(SourceUnavailableError):
                await client.get_series(81189)
        finally:
            await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_null_episode_item_is_unavailable(self, api_key: str) -> None:
        """Un element d'episode qui n'est pas un objet ne doit pas fuir en AttributeError."""
        _mock_login()
        respx.get(f"{BASE}/series/81189").mock(
            return_value=httpx.Response(200, json=TVDB_SERIES_RESPONSE)
        )
        respx.get(f"{BASE}/series/81189/episodes").mock(
            return_value=httpx.Response(200, json={"data": [None], "links": {"next": None}})
        )

        client = TVDBClient(api_key=api_key)
        try:
            with pytest.raises(SourceUnavailableError, match="Malformed"):
                await client.get_series(81189)
        finally:
            await client.close()


class TestTVDBClientCaching:
    """Test snapshot caching."""

    @pytest.mark.asyncio
    @respx.mock(assert_all_called=False)
    async def test_cached_snapshot_skips_api(
        self, respx_mock: respx.Router, mock_cache: MagicMock, api_key: str
    ) -> None:
        cached = CatalogSnapshot(series_id=81189, series_name="Cached")
        mock_cache.get = AsyncMock(return_value=cached)
        login_route = _mock_login(respx_mock)

        client = TVDBClient(api_key=api_key, cache=mock_cache, cache_ttl=3600)
        try:
            snapshot = await client.get_series(81189)
        finally:
            await client.close()

        assert snapshot is cached
        assert not login_route.called
        mock_cache.get.assert_awaited_once_with("tvdb:snapshot:81189:1")

    @pytest.mark.asyncio
    @respx.mock
    async def test_snapshot_is_stored_with_ttl(self, mock_cache: MagicMock, api_key: str) -> None:
        _mock_login()
        respx.get(f"{BASE}/series/81189").mock(
            return_value=httpx.Response(200, json=TVDB_SERIES_RESPONSE)
        )

        client = TVDBClient(api_key=api_key, cache=mock_cache, cache_ttl=600)
        try:
            snapshot = await client.get_series(81189, include_episodes=False)
        finally:
            await client.close()

        mock_cache.set.assert_awaited_once_with("tvdb:snapshot:81189:0", snapshot, ttl=600)

    @pytest.mark.asyncio
    @respx.mock
    async def test_zero_ttl_disables_cache(self, mock_cache: MagicMock, api_key: str) -> None:
        _mock_login()
        respx.get(f"{BASE}/series/81189").mock(
            return_value=httpx.Response(200, json=TVDB_SERIES_RESPONSE)
        )

        client = TVDBClient(api_key=api_key, cache=mock_cache, cache_ttl=0)
        try:
            await client.get_series(81189, include_episodes=False)
        finally:
            await client.close()

        mock_cache.get.assert_not_awaited()
        mock_cache.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalidate_deletes_both_snapshot_keys(
        self, mock_cache: MagicMock, api_key: str
    ) -> None:
        """Une synchronisation forcee oublie les snapshots avec et sans episodes."""
        client = TVDBClient(api_key=api_key, cache=mock_cache, cache_ttl=3600)

        await client.invalidate(81189)

        deleted = [call.args[0] for call in mock_cache.delete.await_args_list]
        assert deleted == ["tvdb:snapshot:81189:1", "tvdb:snapshot:81189:0"]

    @pytest.mark.asyncio
    async def test_invalidate_without_cache_is_noop(self, api_key: str) -> None:
        client = TVDBClient(api_key=api_key)
        await client.invalidate(81189)
