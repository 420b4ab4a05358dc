"""
Cache disque des reponses AniList et anicrush (diskcache).

Une resolution relancee, meme apres redemarrage, ne refait pas les appels
deja servis. Chaque famille de reponses a sa duree de vie:
- media AniList : 7 jours
- recherche anicrush : 24 heures
- liste d'episodes : 6 heures (series en cours de diffusion)

Les clients n'y ecrivent que des reponses valides: un echec fournisseur
ou une enveloppe status=false n'est jamais memorise.
"""

import asyncio
from functools import partial
from typing import Any, Callable, Optional

from diskcache import Cache

_HOUR = 60 * 60


class APICache:
    """
    Facade async sur diskcache.Cache.

    diskcache est bloquant (SQLite); chaque operation passe par l'executor
    par defaut de la boucle pour ne pas la geler.

    Example:
        cache = APICache(cache_dir=".cache/api")
        await cache.set_media("anilist:media:16498", media)
        media = await cache.get("anilist:media:16498")
    """

    MEDIA_TTL = 7 * 24 * _HOUR
    SEARCH_TTL = 24 * _HOUR
    EPISODES_TTL = 6 * _HOUR

    def __init__(self, cache_dir: str = ".cache/api") -> None:
        self._cache = Cache(cache_dir)

    async def _run(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args, **kwargs))

    async def get(self, key: str) -> Optional[Any]:
        """Valeur associee a la cle, None si absente ou expiree."""
        return await self._run(self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Memorise une valeur picklable pour ttl secondes."""
        await self._run(self._cache.set, key, value, expire=ttl)

    async def set_media(self, key: str, value: Any) -> None:
        await self.set(key, value, self.MEDIA_TTL)

    async def set_search(self, key: str, value: Any) -> None:
        await self.set(key, value, self.SEARCH_TTL)

    async def set_episodes(self, key: str, value: Any) -> None:
        await self.set(key, value, self.EPISODES_TTL)

    async def clear(self) -> None:
        """Vide le cache."""
        await self._run(self._cache.clear)

    def close(self) -> None:
        self._cache.close()
