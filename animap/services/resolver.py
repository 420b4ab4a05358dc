"""
Service de resolution AniList -> anicrush.

Le MatchResolver orchestre la resolution complete d'un ID AniList:
1. Recupere le media source une seule fois
2. Essaie les titres romaji, anglais puis natif comme mots-cles de recherche
3. Classe les candidats de chaque recherche avec CandidateRanker
4. S'arrete au premier candidat dont le score atteint le seuil

Les variantes sont essayees strictement dans l'ordre: le premier candidat
accepte l'emporte, les resultats de variantes differentes ne sont jamais
compares entre eux. Aucune relance n'est faite a ce niveau.
"""

from typing import Optional

from loguru import logger

from animap.core.entities.media import (
    MatchResult,
    MatchTitles,
    MediaFormat,
    ScoredCandidate,
    SourceMedia,
)
from animap.core.errors import NoMatchError, NotFoundError, ProviderError
from animap.core.ports.api_clients import ICatalogSearchProvider, IMetadataProvider
from animap.services.matcher import CandidateRanker
from animap.services.season import extract_season_number
from animap.utils.constants import DEFAULT_MATCH_THRESHOLD, DEFAULT_SEARCH_LIMIT
from animap.utils.helpers import map_format_category, normalize_title


def build_comparison_pool(media: SourceMedia) -> list[str]:
    """
    Build the normalized titles compared against every candidate.

    Romaji, English and native titles first, then synonyms. Titles that
    normalize to an empty string are dropped.
    """
    raw_titles = [*media.titles.ordered(), *media.synonyms]
    normalized = (normalize_title(t) for t in raw_titles)
    return [t for t in normalized if t]


class MatchResolver:
    """
    Resout un ID AniList vers la fiche anicrush correspondante.

    Example:
        resolver = MatchResolver(
            metadata_provider=anilist_client,
            search_provider=anicrush_client,
            ranker=CandidateRanker(),
        )
        result = await resolver.resolve(16498)
        print(result.candidate_id, result.score)
    """

    def __init__(
        self,
        metadata_provider: IMetadataProvider,
        search_provider: ICatalogSearchProvider,
        ranker: Optional[CandidateRanker] = None,
        match_threshold: float = DEFAULT_MATCH_THRESHOLD,
        search_limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        """
        Initialise le service de resolution.

        Args:
            metadata_provider: Fournisseur des metadonnees AniList
            search_provider: Recherche par mot-cle anicrush
            ranker: Classeur des candidats (CandidateRanker par defaut)
            match_threshold: Score minimum d'acceptation
            search_limit: Nombre de resultats demandes par recherche
        """
        self._metadata_provider = metadata_provider
        self._search_provider = search_provider
        self._ranker = ranker or CandidateRanker()
        self._match_threshold = match_threshold
        self._search_limit = search_limit

    @property
    def match_threshold(self) -> float:
        """Seuil d'acceptation applique."""
        return self._match_threshold

    async def resolve(self, source_id: int) -> MatchResult:
        """
        Resout un ID AniList.

        Args:
            source_id: ID AniList

        Returns:
            Le MatchResult du premier candidat accepte

        Raises:
            NotFoundError: L'ID n'existe pas sur AniList (aucune recherche faite)
            ProviderError: Echec d'un fournisseur, la resolution est abandonnee
            NoMatchError: Aucune variante n'a produit de candidat accepte
        """
        try:
            media = await self._metadata_provider.get_media(source_id)
        except ProviderError as exc:
            raise exc.with_context(source_id, None) from exc

        if media is None:
            raise NotFoundError(source_id)

        variants = media.titles.ordered()
        source_titles = build_comparison_pool(media)
        expected_type = map_format_category(media.format)
        expected_season = extract_season_number(normalize_title(media.titles.primary))

        logger.debug(
            f"Resolution de l'anime {source_id}: {len(variants)} variante(s), "
            f"saison={expected_season}, format={expected_type}"
        )

        best_seen: Optional[float] = None
        for variant in variants:
            best = await self._search_variant(
                source_id, variant, source_titles, expected_season, expected_type
            )
            if best is None:
                continue

            if best_seen is None or best.score > best_seen:
                best_seen = best.score

            if best.score >= self._match_threshold:
                logger.info(
                    f"Anime {source_id} -> anicrush {best.candidate.id} "
                    f"(score {best.score:.2f}, recherche {variant!r})"
                )
                return self._build_result(media, best, variant)

        logger.info(
            f"Aucune correspondance pour l'anime {source_id} "
            f"(meilleur score: {best_seen})"
        )
        raise NoMatchError(source_id, variants, best_seen, self._match_threshold)

    async def _search_variant(
        self,
        source_id: int,
        variant: str,
        source_titles: list[str],
        expected_season: Optional[int],
        expected_type: Optional[MediaFormat],
    ) -> Optional[ScoredCandidate]:
        """Recherche une variante et retourne son meilleur candidat."""
        logger.debug(f"Recherche anicrush: {variant!r}")
        try:
            response = await self._search_provider.search(
                variant, page=1, limit=self._search_limit
            )
        except ProviderError as exc:
            raise exc.with_context(source_id, variant) from exc

        if not response.status:
            raise ProviderError(
                response.message or "Search failed",
                source_id=source_id,
                variant=variant,
            )

        best = self._ranker.rank(
            source_titles=source_titles,
            expected_season=expected_season,
            expected_type=expected_type,
            candidates=response.movies,
        )
        if best is not None:
            logger.debug(
                f"Meilleur candidat pour {variant!r}: {best.candidate.id} "
                f"({best.score:.2f})"
            )
        return best

    def _build_result(
        self, media: SourceMedia, best: ScoredCandidate, variant: str
    ) -> MatchResult:
        """Construit le resultat final a partir du candidat accepte."""
        candidate = best.candidate
        return MatchResult(
            source_id=media.id,
            candidate_id=candidate.id,
            titles=MatchTitles(
                romaji=media.titles.romaji,
                english=media.titles.english,
                native=media.titles.native,
                candidate_name=candidate.name,
                candidate_name_english=candidate.name_english,
            ),
            type=candidate.type,
            type_tag=candidate.type_tag,
            year=media.year,
            score=best.score,
            matched_variant=variant,
        )
