"""
Tests unitaires pour le mecanisme de retry des clients HTTP.

Ces tests verifient:
- RateLimitError capture le header Retry-After (secondes uniquement)
- request_with_retry relance sur les erreurs de transport httpx
- request_with_retry convertit les 429 et laisse remonter les autres statuts
"""

import json

import httpx
import pytest
import respx

from animap.adapters.api.retry import (
    RateLimitError,
    _parse_retry_after,
    request_with_retry,
)

URL = "https://api.anicrush.to/shared/v2/movie/list"


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_stores_retry_after(self) -> None:
        error = RateLimitError(retry_after=60)
        assert error.retry_after == 60
        assert "60" in str(error)

    @pytest.mark.parametrize(
        "header, expected",
        [("30", 30), (" 5 ", 5), (None, None), ("", None), ("Wed, 21 Oct 2026 07:28:00 GMT", None)],
    )
    def test_parse_retry_after(self, header, expected) -> None:
        """Seules les valeurs en secondes sont interpretees."""
        assert _parse_retry_after(header) == expected


class TestTransportErrors:
    """Tests des relances sur erreur de transport."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_then_success(self, respx_mock: respx.Router) -> None:
        """Une coupure reseau transitoire est relancee."""
        route = respx_mock.get(URL).mock(
            side_effect=[
                httpx.ConnectError("connection refused"),
                httpx.Response(200, json={"status": True}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL, max_wait=1)

        assert response.status_code == 200
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_exhausted_is_reraised(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(side_effect=httpx.ReadTimeout("timeout"))

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.ReadTimeout):
                await request_with_retry(client, "GET", URL, max_attempts=2, max_wait=1)

        assert route.call_count == 2


class TestRequestWithRetry:
    """Tests pour request_with_retry avec httpx."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_429_then_success(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "1"}),
                httpx.Response(200, json={"status": True}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL, max_attempts=3)

        assert response.json() == {"status": True}
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_429_exhausted_raises_rate_limit_error(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(
            return_value=httpx.Response(429, headers={"Retry-After": "30"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(client, "GET", URL, max_attempts=2)

        assert exc_info.value.retry_after == 30
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_is_not_retried(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(return_value=httpx.Response(503))

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await request_with_retry(client, "GET", URL)

        assert exc_info.value.response.status_code == 503
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_forwards_request_kwargs(self, respx_mock: respx.Router) -> None:
        route = respx_mock.post("https://graphql.anilist.co").mock(
            return_value=httpx.Response(200, json={"data": {}})
        )

        async with httpx.AsyncClient() as client:
            await request_with_retry(
                client, "POST", "https://graphql.anilist.co", json={"variables": {"id": 1}}
            )

        assert json.loads(route.calls.last.request.content) == {"variables": {"id": 1}}
