"""
Relance des appels HTTP sur erreurs transitoires (tenacity).

Sont relances, avec un backoff exponentiel aleatoire:
- les reponses 429, converties en RateLimitError
- les erreurs de transport httpx (connexion refusee, timeout, coupure)

Tout autre statut d'erreur remonte des la premiere tentative sous forme
de httpx.HTTPStatusError. Le MatchResolver ne relance jamais: les relances
sont confinees a cette couche.

Usage:
    response = await request_with_retry(client, "GET", "/shared/v2/movie/list")
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

TRANSIENT_ERRORS = (httpx.TransportError,)


class RateLimitError(Exception):
    """
    Le fournisseur a repondu 429 Too Many Requests.

    Attributes:
        retry_after: Delai annonce par le header Retry-After, en secondes
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Retry-After en secondes; les dates HTTP ne sont pas interpretees."""
    if value and value.strip().isdigit():
        return int(value.strip())
    return None


def _log_retry(state: RetryCallState) -> None:
    error = state.outcome.exception() if state.outcome else None
    logger.warning(
        f"Tentative {state.attempt_number} echouee ({error!r}), "
        f"nouvel essai dans {state.next_action.sleep:.1f}s"
    )


def _retry_policy(max_attempts: int, max_wait: int) -> dict:
    """Parametres tenacity de request_with_retry."""
    return {
        "retry": retry_if_exception_type((RateLimitError, *TRANSIENT_ERRORS)),
        "wait": wait_random_exponential(multiplier=1, min=1, max=max_wait),
        "stop": stop_after_attempt(max_attempts),
        "before_sleep": _log_retry,
        "reraise": True,
    }


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 3,
    max_wait: int = 30,
    **kwargs,
) -> httpx.Response:
    """
    Envoie une requete et relance sur 429 ou erreur de transport.

    Args:
        client: Client httpx async
        method: Methode HTTP
        url: URL, absolue ou relative au base_url du client
        max_attempts: Nombre total de tentatives
        max_wait: Attente maximale entre deux tentatives, en secondes
        **kwargs: Transmis a client.request() (params, json, headers...)

    Returns:
        La reponse, de statut 2xx

    Raises:
        RateLimitError: Toujours 429 a la derniere tentative
        httpx.TransportError: Toujours injoignable a la derniere tentative
        httpx.HTTPStatusError: Tout autre statut d'erreur, sans relance
    """
    async for attempt in AsyncRetrying(**_retry_policy(max_attempts, max_wait)):
        with attempt:
            response = await client.request(method, url, **kwargs)
            if response.status_code == 429:
                raise RateLimitError(
                    _parse_retry_after(response.headers.get("Retry-After"))
                )
            response.raise_for_status()
    return response
