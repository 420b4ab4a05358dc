"""
Fixtures pytest partagees pour les tests animap.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks des ports (IMetadataProvider, ICatalogSearchProvider)
- Medias AniList types
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from animap.config import Settings
from animap.core.entities.media import MediaFormat, SourceMedia, SourceTitles
from animap.core.ports.api_clients import ICatalogSearchProvider, IMetadataProvider
from tests.fixtures.builders import make_response


@pytest.fixture
def mock_metadata_provider() -> AsyncMock:
    """
    Mock de IMetadataProvider.

    Retourne None par defaut (ID inconnu); configurer get_media dans chaque test.
    """
    provider = AsyncMock(spec=IMetadataProvider)
    provider.get_media.return_value = None
    return provider


@pytest.fixture
def mock_search_provider() -> AsyncMock:
    """
    Mock de ICatalogSearchProvider.

    Retourne une recherche vide par defaut.
    """
    provider = AsyncMock(spec=ICatalogSearchProvider)
    provider.search.return_value = make_response()
    return provider


@pytest.fixture
def aot_media() -> SourceMedia:
    """Shingeki no Kyojin (AniList 16498)."""
    return SourceMedia(
        id=16498,
        titles=SourceTitles(
            romaji="Shingeki no Kyojin",
            english="Attack on Titan",
            native="進撃の巨人",
        ),
        synonyms=("AoT", "SnK"),
        format=MediaFormat.TV,
        year=2013,
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test isoles dans tmp_path."""
    return Settings(
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "animap.log",
        match_threshold=50,
    )
