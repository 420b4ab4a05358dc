"""
Client AniList pour la recuperation des metadonnees d'un anime.

Implemente IMetadataProvider via l'API GraphQL publique d'AniList.
Seuls les champs utiles a la resolution sont demandes: titres, synonymes,
format et annee de diffusion.

Usage:
    client = AniListClient(cache=APICache())
    media = await client.get_media(16498)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from animap.adapters.api.cache import APICache
from animap.adapters.api.retry import RateLimitError, request_with_retry
from animap.core.entities.media import MediaFormat, SourceMedia, SourceTitles
from animap.core.errors import ProviderError
from animap.core.ports.api_clients import IMetadataProvider

ANILIST_MEDIA_QUERY = """
query ($id: Int) {
  Media(id: $id, type: ANIME) {
    id
    title {
      romaji
      english
      native
    }
    synonyms
    format
    seasonYear
  }
}
"""


def parse_media(data: dict[str, Any]) -> SourceMedia:
    """
    Convertit le noeud GraphQL Media en SourceMedia.

    Args:
        data: Noeud `data.Media` de la reponse AniList

    Returns:
        SourceMedia correspondant
    """
    title = data.get("title") or {}
    return SourceMedia(
        id=int(data["id"]),
        titles=SourceTitles(
            romaji=title.get("romaji") or None,
            english=title.get("english") or None,
            native=title.get("native") or None,
        ),
        synonyms=tuple(s for s in data.get("synonyms") or [] if s),
        format=MediaFormat.parse(data.get("format")),
        year=data.get("seasonYear"),
    )


class AniListClient(IMetadataProvider):
    """
    Client API AniList (GraphQL).

    Implemente IMetadataProvider avec:
    - Recuperation d'un anime par ID (titres, synonymes, format, annee)
    - Cache persistant optionnel (7 jours)
    - Retry automatique sur rate limiting (429) et erreurs reseau

    Attributes:
        ANILIST_URL: Endpoint GraphQL par defaut
    """

    ANILIST_URL = "https://graphql.anilist.co"

    def __init__(
        self,
        cache: Optional[APICache] = None,
        base_url: str = ANILIST_URL,
        timeout: float = 20.0,
    ) -> None:
        """
        Initialise le client AniList.

        Args:
            cache: Cache des reponses (None pour desactiver)
            base_url: Endpoint GraphQL
            timeout: Timeout des requetes en secondes
        """
        self._cache = cache
        self._base_url = base_url
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                timeout=self._timeout,
            )
        return self._client

    async def get_media(self, media_id: int) -> Optional[SourceMedia]:
        """
        Recupere un anime par son ID AniList.

        Args:
            media_id: ID AniList

        Returns:
            SourceMedia, ou None si l'ID n'existe pas

        Raises:
            ProviderError: Echec reseau, statut HTTP inattendu ou reponse invalide
        """
        cache_key = f"anilist:media:{media_id}"
        if self._cache is not None:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return cached

        client = self._get_client()
        payload = {"query": ANILIST_MEDIA_QUERY, "variables": {"id": int(media_id)}}
        try:
            response = await request_with_retry(client, "POST", self._base_url, json=payload)
            data = response.json()
        except httpx.HTTPStatusError as e:
            # AniList repond 404 pour un ID inexistant
            if e.response.status_code == 404:
                return None
            logger.warning(f"AniList: statut {e.response.status_code} pour l'anime {media_id}")
            raise ProviderError(
                f"AniList request failed with status {e.response.status_code}",
                source_id=media_id,
            ) from e
        except (httpx.HTTPError, RateLimitError) as e:
            logger.warning(f"AniList: echec de la requete pour l'anime {media_id}: {e}")
            raise ProviderError(
                "Failed to fetch anime details from AniList", source_id=media_id
            ) from e
        except ValueError as e:
            raise ProviderError("Invalid JSON response from AniList", source_id=media_id) from e

        if not isinstance(data, dict):
            raise ProviderError("Unexpected AniList response payload", source_id=media_id)

        payload_data = data.get("data")
        node = payload_data.get("Media") if isinstance(payload_data, dict) else None
        if not node:
            return None

        try:
            media = parse_media(node)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ProviderError("Malformed AniList media payload", source_id=media_id) from e

        if self._cache is not None:
            await self._cache.set_media(cache_key, media)
        return media

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
