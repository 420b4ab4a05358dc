"""
Routes de resolution et d'episodes.

Les erreurs de resolution sont traduites en statuts HTTP:
- NotFoundError / NoMatchError -> 404
- ProviderError -> 502 (echec d'un fournisseur amont)
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Path

from ...adapters.api.anicrush_client import AnicrushClient
from ...core.errors import NoMatchError, NotFoundError, ProviderError
from ...services.resolver import MatchResolver
from ..deps import get_anicrush_client, get_resolver

router = APIRouter(prefix="/api")


@router.get("/mapper/{anilist_id}")
async def map_anime(
    anilist_id: int = Path(ge=1),
    resolver: MatchResolver = Depends(get_resolver),
) -> dict[str, Any]:
    """Resout un ID AniList vers la fiche anicrush."""
    try:
        result = await resolver.resolve(anilist_id)
    except (NotFoundError, NoMatchError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return result.to_dict()


@router.get("/episodes/{movie_id}")
async def list_episodes(
    movie_id: str,
    client: AnicrushClient = Depends(get_anicrush_client),
) -> dict[str, Any]:
    """Liste les episodes d'une fiche anicrush."""
    try:
        items = await client.get_episode_list(movie_id)
    except ProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {
        "movie_id": movie_id,
        "total": len(items),
        "episodes": [
            {
                "number": ep.number,
                "name": ep.name,
                "name_english": ep.name_english,
                "is_filler": ep.is_filler,
            }
            for ep in items
        ],
    }
