"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour le CLI et l'API HTTP:
configuration, cache, clients AniList / anicrush et services de resolution.
"""

from dependency_injector import containers, providers

from .adapters.api.anicrush_client import AnicrushClient
from .adapters.api.anilist_client import AniListClient
from .adapters.api.cache import APICache
from .config import Settings
from .services.matcher import CandidateRanker
from .services.resolver import MatchResolver
from .services.season import SeasonExtractor


def _build_cache(enabled: bool, cache_dir) -> APICache | None:
    """Cree le cache disque, ou None s'il est desactive."""
    if not enabled:
        return None
    return APICache(cache_dir=str(cache_dir))


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        resolver = container.match_resolver()
        result = await resolver.resolve(16498)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Cache API - Singleton partage entre les clients
    api_cache = providers.Singleton(
        _build_cache,
        enabled=config.provided.cache_enabled,
        cache_dir=config.provided.cache_dir,
    )

    # Clients API - Singletons (un client httpx par fournisseur)
    anilist_client = providers.Singleton(
        AniListClient,
        cache=api_cache,
        base_url=config.provided.anilist_url,
        timeout=config.provided.request_timeout,
    )

    anicrush_client = providers.Singleton(
        AnicrushClient,
        cache=api_cache,
        base_url=config.provided.anicrush_api_url,
        site_url=config.provided.anicrush_site_url,
        timeout=config.provided.request_timeout,
    )

    # Scoring (stateless - Singletons)
    season_extractor = providers.Singleton(SeasonExtractor)
    candidate_ranker = providers.Singleton(
        CandidateRanker,
        season_extractor=season_extractor,
    )

    # Resolution - Factory, sans etat entre deux appels
    match_resolver = providers.Factory(
        MatchResolver,
        metadata_provider=anilist_client,
        search_provider=anicrush_client,
        ranker=candidate_ranker,
        match_threshold=config.provided.match_threshold,
        search_limit=config.provided.search_limit,
    )


async def close_container(container: Container) -> None:
    """Ferme les clients HTTP et le cache crees par le container."""
    await container.anilist_client().close()
    await container.anicrush_client().close()
    cache = container.api_cache()
    if cache is not None:
        cache.close()
