"""
Client anicrush pour la recherche par mot-cle et les listes d'episodes.

Implemente ICatalogSearchProvider. L'API anicrush n'a pas d'identifiants
communs avec AniList: seule la recherche plein texte est disponible.
Toutes les reponses suivent l'enveloppe `{status, message, result}`.

Usage:
    client = AnicrushClient(cache=APICache())
    response = await client.search("Shingeki no Kyojin")
    episodes = await client.get_episode_list(response.movies[0].id)
    await client.close()
"""

from typing import Any, Optional, Union

import httpx
from loguru import logger

from animap.adapters.api.cache import APICache
from animap.adapters.api.retry import RateLimitError, request_with_retry
from animap.core.entities.media import (
    CatalogCandidate,
    CatalogSearchResponse,
    Episode,
    MediaFormat,
)
from animap.core.errors import ProviderError
from animap.core.ports.api_clients import ICatalogSearchProvider
from animap.utils.constants import DEFAULT_SEARCH_LIMIT

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/133.0.0.0 Safari/537.36"
)


def build_headers(site_url: str) -> dict[str, str]:
    """En-tetes attendus par l'API anicrush (requete navigateur same-site)."""
    site = site_url.rstrip("/")
    return {
        "Accept": "application/json, text/plain, */*",
        "User-Agent": USER_AGENT,
        "x-site": "anicrush",
        "Referer": f"{site}/",
        "Origin": site,
        "sec-fetch-site": "same-site",
        "sec-fetch-mode": "cors",
        "sec-fetch-dest": "empty",
    }


def parse_candidate(item: dict[str, Any]) -> CatalogCandidate:
    """Convertit une entree de `result.movies` en CatalogCandidate."""
    type_tag = str(item.get("type") or "").strip()
    return CatalogCandidate(
        id=item.get("id"),
        name=item.get("name") or None,
        name_english=item.get("name_english") or None,
        type=MediaFormat.parse(type_tag) if type_tag else None,
        type_tag=type_tag or None,
    )


def parse_search_response(data: dict[str, Any]) -> CatalogSearchResponse:
    """
    Convertit l'enveloppe de recherche anicrush.

    Les entrees sans identifiant sont ignorees.
    """
    result = data.get("result") or {}
    movies = (result.get("movies") or []) if isinstance(result, dict) else []
    return CatalogSearchResponse(
        status=data.get("status") is not False,
        message=data.get("message"),
        movies=tuple(
            parse_candidate(item)
            for item in movies
            if isinstance(item, dict) and item.get("id") is not None
        ),
    )


def parse_episode_list(data: dict[str, Any]) -> list[Episode]:
    """
    Aplatit la liste d'episodes anicrush.

    `result` regroupe les episodes par tranches (cles arbitraires); toutes
    les valeurs de type liste sont fusionnees puis triees par numero.
    """
    result = data.get("result")
    if not isinstance(result, dict):
        return []

    episodes = []
    for value in result.values():
        if not isinstance(value, list):
            continue
        for ep in value:
            if not isinstance(ep, dict) or ep.get("number") is None:
                continue
            episodes.append(
                Episode(
                    number=int(ep["number"]),
                    name=ep.get("name"),
                    name_english=ep.get("name_english"),
                    is_filler=bool(ep.get("is_filler")),
                )
            )
    return sorted(episodes, key=lambda e: e.number)


def _error_message(response: httpx.Response, default: str) -> str:
    """Message d'erreur du corps de reponse, sinon le message par defaut."""
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return default


class AnicrushClient(ICatalogSearchProvider):
    """
    Client API anicrush.

    Implemente ICatalogSearchProvider avec:
    - Recherche par mot-cle (enveloppe status/message/result.movies)
    - Liste des episodes d'une fiche
    - Cache persistant optionnel (24h recherches, 6h episodes)
    - Retry automatique sur rate limiting (429) et erreurs reseau

    Attributes:
        API_URL: URL de base de l'API anicrush
        SITE_URL: Site web (Referer / Origin)
    """

    API_URL = "https://api.anicrush.to"
    SITE_URL = "https://anicrush.to"

    def __init__(
        self,
        cache: Optional[APICache] = None,
        base_url: str = API_URL,
        site_url: str = SITE_URL,
        timeout: float = 20.0,
    ) -> None:
        """
        Initialise le client anicrush.

        Args:
            cache: Cache des reponses (None pour desactiver)
            base_url: URL de base de l'API
            site_url: URL du site pour les en-tetes Referer / Origin
            timeout: Timeout des requetes en secondes
        """
        self._cache = cache
        self._base_url = base_url
        self._site_url = site_url
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=build_headers(self._site_url),
                timeout=self._timeout,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant du catalogue."""
        return "anicrush"

    async def _get_json(self, path: str, params: dict[str, Any], failure: str) -> dict[str, Any]:
        """
        GET JSON avec traduction des erreurs en ProviderError.

        Args:
            path: Chemin relatif a l'URL de base
            params: Parametres de requete
            failure: Message utilise quand la reponse n'en fournit pas
        """
        client = self._get_client()
        try:
            response = await request_with_retry(client, "GET", path, params=params)
            data = response.json()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response, failure)
            logger.warning(f"anicrush {path}: statut {e.response.status_code} ({message})")
            raise ProviderError(message) from e
        except (httpx.HTTPError, RateLimitError) as e:
            logger.warning(f"anicrush {path}: pas de reponse ({e})")
            raise ProviderError(f"No response from anicrush: {failure}") from e
        except ValueError as e:
            raise ProviderError(f"Invalid JSON response from anicrush: {failure}") from e

        if not isinstance(data, dict):
            raise ProviderError(f"Unexpected anicrush response payload: {failure}")
        return data

    async def search(
        self,
        keyword: str,
        page: int = 1,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> CatalogSearchResponse:
        """
        Recherche des fiches par mot-cle.

        Une enveloppe status=false est retournee telle quelle (et non
        cachee); c'est a l'appelant de la traiter comme un echec.

        Args:
            keyword: Titre recherche
            page: Page de resultats
            limit: Nombre de resultats par page

        Returns:
            CatalogSearchResponse

        Raises:
            ValueError: Mot-cle vide
            ProviderError: Echec reseau ou statut HTTP d'erreur
        """
        if not keyword or not keyword.strip():
            raise ValueError("Search keyword is required")

        cache_key = f"anicrush:search:{keyword}:{page}:{limit}"
        if self._cache is not None:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return cached

        data = await self._get_json(
            "/shared/v2/movie/list",
            {"keyword": keyword, "page": page, "limit": limit},
            "Search request failed",
        )
        response = parse_search_response(data)

        if response.status and self._cache is not None:
            await self._cache.set_search(cache_key, response)
        return response

    async def get_episode_list(self, movie_id: Union[str, int]) -> list[Episode]:
        """
        Recupere la liste des episodes d'une fiche anicrush.

        Args:
            movie_id: ID anicrush de la fiche

        Returns:
            Episodes tries par numero

        Raises:
            ValueError: ID vide
            ProviderError: Echec reseau, statut HTTP d'erreur ou status=false
        """
        if movie_id is None or str(movie_id).strip() == "":
            raise ValueError("Movie ID is required")

        cache_key = f"anicrush:episodes:{movie_id}"
        if self._cache is not None:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return cached

        data = await self._get_json(
            "/shared/v2/episode/list",
            {"_movieId": movie_id},
            "Episode list request failed",
        )
        if data.get("status") is False:
            raise ProviderError(data.get("message") or "Failed to fetch episode list")

        episodes = parse_episode_list(data)
        if self._cache is not None:
            await self._cache.set_episodes(cache_key, episodes)
        return episodes

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
