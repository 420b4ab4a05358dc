"""
Media entities for cross-catalog resolution.

Value objects representing an AniList media record, the candidates
returned by the anicrush keyword search, and the resolved match.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class MediaFormat(Enum):
    """
    Format category of a media record.

    Values follow the AniList format names. The anicrush catalog uses the
    same names, except that it has no TV_SHORT category.
    """

    TV = "TV"
    TV_SHORT = "TV_SHORT"
    MOVIE = "MOVIE"
    SPECIAL = "SPECIAL"
    OVA = "OVA"
    ONA = "ONA"
    MUSIC = "MUSIC"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Optional[str]) -> "MediaFormat":
        """Parse a raw format tag, UNKNOWN for absent or unrecognized values."""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class SourceTitles:
    """
    Title variants of an AniList media.

    Attributes:
        romaji: Romanized title (usually the primary one)
        english: Official English title
        native: Title in the original script
    """

    romaji: Optional[str] = None
    english: Optional[str] = None
    native: Optional[str] = None

    def ordered(self) -> list[str]:
        """Non-blank titles in search priority order (romaji, english, native)."""
        return [t for t in (self.romaji, self.english, self.native) if t and t.strip()]

    @property
    def primary(self) -> Optional[str]:
        """First non-empty title, or None."""
        titles = self.ordered()
        return titles[0] if titles else None


@dataclass(frozen=True)
class SourceMedia:
    """
    Media record fetched from AniList.

    Attributes:
        id: AniList ID
        titles: Romaji / English / native titles
        synonyms: Alternative titles
        format: AniList format category
        year: Season year (or None)
    """

    id: int
    titles: SourceTitles = field(default_factory=SourceTitles)
    synonyms: tuple[str, ...] = ()
    format: MediaFormat = MediaFormat.UNKNOWN
    year: Optional[int] = None


@dataclass(frozen=True)
class CatalogCandidate:
    """
    Search result from the anicrush catalog.

    Attributes:
        id: anicrush movie ID (opaque string or integer)
        name: Displayed name (usually romaji)
        name_english: English name
        type: Format category, None when not provided
        type_tag: Type tag exactly as sent by anicrush
    """

    id: Union[str, int]
    name: Optional[str] = None
    name_english: Optional[str] = None
    type: Optional[MediaFormat] = None
    type_tag: Optional[str] = None

    def titles(self) -> list[str]:
        """Non-empty name fields, in comparison order."""
        return [t for t in (self.name, self.name_english) if t]


@dataclass(frozen=True)
class CatalogSearchResponse:
    """Parsed envelope of an anicrush search call."""

    status: bool = True
    message: Optional[str] = None
    movies: tuple[CatalogCandidate, ...] = ()


@dataclass(frozen=True)
class ScoredCandidate:
    """Best candidate of a ranking pass with its score."""

    candidate: CatalogCandidate
    score: float


@dataclass(frozen=True)
class MatchTitles:
    """Titles on both sides of a resolved match."""

    romaji: Optional[str] = None
    english: Optional[str] = None
    native: Optional[str] = None
    candidate_name: Optional[str] = None
    candidate_name_english: Optional[str] = None


@dataclass(frozen=True)
class MatchResult:
    """
    Resolved AniList -> anicrush match.

    Attributes:
        source_id: AniList ID
        candidate_id: anicrush movie ID
        titles: Titles from both catalogs
        type: anicrush format category of the match
        year: AniList season year
        score: Accepted ranking score
        matched_variant: Search keyword that produced the match
        type_tag: anicrush type tag as received (kept for unknown formats)
    """

    source_id: int
    candidate_id: Union[str, int]
    titles: MatchTitles
    type: Optional[MediaFormat] = None
    year: Optional[int] = None
    score: float = 0.0
    matched_variant: Optional[str] = None
    type_tag: Optional[str] = None

    @property
    def type_label(self) -> Optional[str]:
        """Type affiche: le tag anicrush brut, sinon le nom du format."""
        if self.type_tag:
            return self.type_tag
        return self.type.value if self.type else None

    def to_dict(self) -> dict[str, Any]:
        """Serialise le resultat au format expose par le CLI et l'API HTTP."""
        return {
            "anilist_id": self.source_id,
            "anicrush_id": self.candidate_id,
            "title": {
                "romaji": self.titles.romaji,
                "english": self.titles.english,
                "native": self.titles.native,
                "anicrush": self.titles.candidate_name,
                "anicrush_english": self.titles.candidate_name_english,
            },
            "type": self.type_label,
            "year": self.year,
            "score": round(self.score, 2),
        }


@dataclass(frozen=True)
class Episode:
    """
    Episode of an anicrush entry.

    Attributes:
        number: Episode number
        name: Episode title
        name_english: English episode title
        is_filler: True for filler episodes
    """

    number: int
    name: Optional[str] = None
    name_english: Optional[str] = None
    is_filler: bool = False
