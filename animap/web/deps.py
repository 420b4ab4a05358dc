"""
Dependances partagees de l'application web.

Les services sont tires du Container DI attache a l'application; les tests
les remplacent via app.dependency_overrides.
"""

from fastapi import Request

from ..adapters.api.anicrush_client import AnicrushClient
from ..services.resolver import MatchResolver


def get_resolver(request: Request) -> MatchResolver:
    """Service de resolution du container."""
    return request.app.state.container.match_resolver()


def get_anicrush_client(request: Request) -> AnicrushClient:
    """Client anicrush du container."""
    return request.app.state.container.anicrush_client()
