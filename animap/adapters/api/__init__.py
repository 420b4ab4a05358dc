"""
Clients API externes de la resolution.

Ce module fournit les adaptateurs pour communiquer avec les API externes:
- AniList: metadonnees du media source (GraphQL)
- anicrush: recherche par mot-cle et listes d'episodes

Infrastructure partagee:
- APICache: Cache persistant avec TTL differencies
- RateLimitError / request_with_retry: backoff exponentiel sur 429 et erreurs reseau

Les clients implementent les ports definis dans core/ports/api_clients.py.
"""

from animap.adapters.api.anicrush_client import AnicrushClient
from animap.adapters.api.anilist_client import AniListClient
from animap.adapters.api.cache import APICache
from animap.adapters.api.retry import RateLimitError, request_with_retry

__all__ = [
    "AniListClient",
    "AnicrushClient",
    "APICache",
    "RateLimitError",
    "request_with_retry",
]
