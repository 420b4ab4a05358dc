"""
Business entities representing core domain concepts.

All entities are immutable value objects: they are fetched or computed
once and shared freely between the adapters and the resolution engine.

Exports:
- MediaFormat: Format category (TV, MOVIE, OVA...)
- SourceMedia / SourceTitles: AniList media record
- CatalogCandidate / CatalogSearchResponse: anicrush search results
- ScoredCandidate: Best candidate of a ranking pass
- MatchResult / MatchTitles: Resolved match
- Episode: Episode of an anicrush entry
"""

from animap.core.entities.media import (
    CatalogCandidate,
    CatalogSearchResponse,
    Episode,
    MatchResult,
    MatchTitles,
    MediaFormat,
    ScoredCandidate,
    SourceMedia,
    SourceTitles,
)

__all__ = [
    "CatalogCandidate",
    "CatalogSearchResponse",
    "Episode",
    "MatchResult",
    "MatchTitles",
    "MediaFormat",
    "ScoredCandidate",
    "SourceMedia",
    "SourceTitles",
]
