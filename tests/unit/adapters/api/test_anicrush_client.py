"""
Tests for AnicrushClient - anicrush keyword search and episode lists.

Uses respx to mock httpx calls and verifies:
- search() parses the {status, message, result.movies} envelope
- status=false envelopes are returned as-is and never cached
- HTTP and transport failures become ProviderError
- get_episode_list() flattens the grouped episode list
"""

from unittest.mock import AsyncMock

import httpx
import pytest
import respx

from animap.adapters.api.anicrush_client import (
    AnicrushClient,
    build_headers,
    parse_candidate,
    parse_episode_list,
    parse_search_response,
)
from animap.adapters.api.cache import APICache
from animap.core.entities.media import CatalogSearchResponse, Episode, MediaFormat
from animap.core.errors import ProviderError
from animap.core.ports.api_clients import ICatalogSearchProvider
from tests.fixtures.anicrush_responses import (
    ANICRUSH_EPISODE_LIST_FAILED_RESPONSE,
    ANICRUSH_EPISODE_LIST_RESPONSE,
    ANICRUSH_SEARCH_EMPTY_RESPONSE,
    ANICRUSH_SEARCH_FAILED_RESPONSE,
    ANICRUSH_SEARCH_RESPONSE,
)

SEARCH_URL = "https://api.anicrush.to/shared/v2/movie/list"
EPISODES_URL = "https://api.anicrush.to/shared/v2/episode/list"


@pytest.fixture
def mock_cache() -> AsyncMock:
    """Mock APICache for testing."""
    cache = AsyncMock(spec=APICache)
    cache.get.return_value = None  # Cache miss by default
    return cache


@pytest.fixture
def anicrush_client(mock_cache: AsyncMock) -> AnicrushClient:
    """AnicrushClient instance with mocked cache."""
    return AnicrushClient(cache=mock_cache)


class TestAnicrushClientInterface:
    """Test AnicrushClient implements ICatalogSearchProvider correctly."""

    def test_implements_interface(self, anicrush_client: AnicrushClient):
        assert isinstance(anicrush_client, ICatalogSearchProvider)

    def test_source_property_returns_anicrush(self, anicrush_client: AnicrushClient):
        assert anicrush_client.source == "anicrush"

    def test_headers_mimic_same_site_browser(self):
        headers = build_headers("https://anicrush.to/")
        assert headers["x-site"] == "anicrush"
        assert headers["Referer"] == "https://anicrush.to/"
        assert headers["Origin"] == "https://anicrush.to"


class TestParsing:
    """Tests for the envelope parsers."""

    def test_search_response_skips_items_without_id(self):
        response = parse_search_response(ANICRUSH_SEARCH_RESPONSE)

        assert response.status is True
        assert [m.id for m in response.movies] == ["vRPjMA", "kX1a9Q", 4512]

    def test_search_response_candidate_fields(self):
        first, second, third = parse_search_response(ANICRUSH_SEARCH_RESPONSE).movies

        assert first.name == "Shingeki no Kyojin"
        assert first.name_english == "Attack on Titan"
        assert first.type == MediaFormat.TV
        assert second.type == MediaFormat.OVA
        assert second.name_english is None
        assert third.type is None

    def test_unrecognised_type_keeps_raw_tag(self):
        candidate = parse_candidate({"id": 7, "name": "Kara no Kyoukai", "type": "TV_SPECIAL"})

        assert candidate.type == MediaFormat.UNKNOWN
        assert candidate.type_tag == "TV_SPECIAL"

    def test_failed_envelope(self):
        response = parse_search_response(ANICRUSH_SEARCH_FAILED_RESPONSE)

        assert response.status is False
        assert response.message == "Keyword is too short"
        assert response.movies == ()

    def test_missing_status_counts_as_success(self):
        response = parse_search_response({"result": {"movies": []}})
        assert response.status is True

    def test_episode_list_is_flattened_and_sorted(self):
        episodes = parse_episode_list(ANICRUSH_EPISODE_LIST_RESPONSE)

        assert [ep.number for ep in episodes] == [1, 2, 14, 26]
        assert episodes[0] == Episode(
            number=1,
            name="Nisen Nengo no Kimi e",
            name_english="To You, in 2000 Years",
            is_filler=False,
        )
        assert episodes[2].is_filler is True

    def test_episode_list_without_result(self):
        assert parse_episode_list({"status": True, "result": None}) == []


class TestAnicrushSearch:
    """Tests for AnicrushClient.search() method."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_returns_candidates(self, anicrush_client: AnicrushClient):
        respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=ANICRUSH_SEARCH_RESPONSE)
        )

        response = await anicrush_client.search("Shingeki no Kyojin")

        assert isinstance(response, CatalogSearchResponse)
        assert response.status is True
        assert len(response.movies) == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_sends_keyword_page_and_limit(self, anicrush_client: AnicrushClient):
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=ANICRUSH_SEARCH_EMPTY_RESPONSE)
        )

        await anicrush_client.search("進撃の巨人", page=2, limit=10)

        params = route.calls.last.request.url.params
        assert params["keyword"] == "進撃の巨人"
        assert params["page"] == "2"
        assert params["limit"] == "10"

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_sends_site_headers(self, anicrush_client: AnicrushClient):
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=ANICRUSH_SEARCH_EMPTY_RESPONSE)
        )

        await anicrush_client.search("Naruto")

        request = route.calls.last.request
        assert request.headers["x-site"] == "anicrush"
        assert request.headers["Origin"] == "https://anicrush.to"

    @pytest.mark.asyncio
    async def test_search_rejects_empty_keyword(self, anicrush_client: AnicrushClient):
        with pytest.raises(ValueError):
            await anicrush_client.search("   ")

    @pytest.mark.asyncio
    @respx.mock
    async def test_failed_envelope_is_returned_not_raised(
        self, anicrush_client: AnicrushClient, mock_cache: AsyncMock
    ):
        respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=ANICRUSH_SEARCH_FAILED_RESPONSE)
        )

        response = await anicrush_client.search("a")

        assert response.status is False
        mock_cache.set_search.assert_not_called()

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_status_uses_body_message(self, anicrush_client: AnicrushClient):
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(403, json={"status": False, "message": "Forbidden"})
        )

        with pytest.raises(ProviderError) as exc_info:
            await anicrush_client.search("Naruto")

        assert exc_info.value.reason == "Forbidden"
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_status_without_body_uses_default_message(
        self, anicrush_client: AnicrushClient
    ):
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(500, text="oops"))

        with pytest.raises(ProviderError) as exc_info:
            await anicrush_client.search("Naruto")

        assert exc_info.value.reason == "Search request failed"

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_raises_provider_error(self, anicrush_client: AnicrushClient):
        route = respx.get(SEARCH_URL).mock(side_effect=httpx.ConnectTimeout("timeout"))

        with pytest.raises(ProviderError) as exc_info:
            await anicrush_client.search("Naruto")

        assert exc_info.value.reason.startswith("No response from anicrush")
        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_object_payload_raises_provider_error(
        self, anicrush_client: AnicrushClient
    ):
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json=["not", "an", "object"]))

        with pytest.raises(ProviderError):
            await anicrush_client.search("Naruto")


class TestAnicrushCache:
    """Tests for the cache-first pattern."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_cache_hit_skips_api_call(
        self, anicrush_client: AnicrushClient, mock_cache: AsyncMock
    ):
        cached = CatalogSearchResponse(status=True)
        mock_cache.get.return_value = cached
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=ANICRUSH_SEARCH_RESPONSE)
        )

        response = await anicrush_client.search("Naruto")

        assert response is cached
        mock_cache.get.assert_awaited_once_with("anicrush:search:Naruto:1:24")
        assert route.call_count == 0

    @pytest.mark.asyncio
    @respx.mock
    async def test_successful_search_is_cached(
        self, anicrush_client: AnicrushClient, mock_cache: AsyncMock
    ):
        respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=ANICRUSH_SEARCH_RESPONSE)
        )

        response = await anicrush_client.search("Shingeki no Kyojin")

        mock_cache.set_search.assert_awaited_once_with(
            "anicrush:search:Shingeki no Kyojin:1:24", response
        )


class TestAnicrushEpisodes:
    """Tests for AnicrushClient.get_episode_list() method."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_sorted_episodes(
        self, anicrush_client: AnicrushClient, mock_cache: AsyncMock
    ):
        route = respx.get(EPISODES_URL).mock(
            return_value=httpx.Response(200, json=ANICRUSH_EPISODE_LIST_RESPONSE)
        )

        episodes = await anicrush_client.get_episode_list("vRPjMA")

        assert [ep.number for ep in episodes] == [1, 2, 14, 26]
        assert route.calls.last.request.url.params["_movieId"] == "vRPjMA"
        mock_cache.set_episodes.assert_awaited_once_with("anicrush:episodes:vRPjMA", episodes)

    @pytest.mark.asyncio
    @respx.mock
    async def test_failed_envelope_raises_provider_error(
        self, anicrush_client: AnicrushClient, mock_cache: AsyncMock
    ):
        respx.get(EPISODES_URL).mock(
            return_value=httpx.Response(200, json=ANICRUSH_EPISODE_LIST_FAILED_RESPONSE)
        )

        with pytest.raises(ProviderError) as exc_info:
            await anicrush_client.get_episode_list("unknown")

        assert exc_info.value.reason == "Movie not found"
        mock_cache.set_episodes.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_empty_id(self, anicrush_client: AnicrushClient):
        with pytest.raises(ValueError):
            await anicrush_client.get_episode_list("")
