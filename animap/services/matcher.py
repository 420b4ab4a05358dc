"""
Service de scoring pour le matching de resultats anicrush.

Calcule la similarite entre les titres AniList et les candidats retournes
par la recherche anicrush, puis selectionne le meilleur candidat.

Formule de similarite (titres deja normalises):
- 40% distance d'edition (Levenshtein normalisee)
- 60% recouvrement de mots (Jaccard)

Ajustements du classement:
- Format different (apres TV_SHORT -> TV): -15
- Saison identique: +25, saison differente: -30

Le scoring est deterministe pour des resultats reproductibles.
"""

from typing import Callable, Optional, Sequence

from rapidfuzz.distance import Levenshtein

from animap.core.entities.media import CatalogCandidate, MediaFormat, ScoredCandidate
from animap.services.season import SeasonExtractor
from animap.utils.constants import (
    SEASON_MATCH_BONUS,
    SEASON_MISMATCH_PENALTY,
    SIMILARITY_WEIGHTS,
    TYPE_MISMATCH_PENALTY,
    SimilarityWeights,
)
from animap.utils.helpers import map_format_category, normalize_title


def _calculate_edit_similarity(a: str, b: str) -> float:
    """
    Calculate normalized Levenshtein similarity (0-100).

    Two empty strings are identical (100).
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 100.0
    distance = Levenshtein.distance(a, b)
    return (max_len - distance) / max_len * 100


def _calculate_token_similarity(a: str, b: str) -> float:
    """
    Calculate word overlap similarity (0-100).

    Jaccard index of the whitespace-separated token sets. An empty union
    scores 0 so that empty titles never produce a vacuous full match.
    """
    tokens_a = set(a.split())
    tokens_b = set(b.split())
    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) / len(union) * 100


def calculate_title_similarity(
    a: str,
    b: str,
    weights: SimilarityWeights = SIMILARITY_WEIGHTS,
) -> float:
    """
    Calculate the blended similarity of two normalized titles.

    Args:
        a: First normalized title
        b: Second normalized title
        weights: Edit-distance / token-overlap weights

    Returns:
        Similarity score from 0.0 to 100.0
    """
    edit_score = _calculate_edit_similarity(a, b)
    if not a and not b:
        return edit_score
    token_score = _calculate_token_similarity(a, b)
    return weights.edit * edit_score + weights.token * token_score


class CandidateRanker:
    """
    Classe les candidats anicrush par rapport aux titres AniList.

    Chaque paire (titre source, champ de nom du candidat) est scoree;
    le candidat garde son meilleur score et le premier candidat au score
    maximal l'emporte.

    Example:
        ranker = CandidateRanker()
        best = ranker.rank(
            source_titles=["shingeki no kyojin"],
            expected_season=None,
            expected_type=MediaFormat.TV,
            candidates=response.movies,
        )
    """

    def __init__(
        self,
        season_extractor: Optional[Callable[[str], Optional[int]]] = None,
        weights: SimilarityWeights = SIMILARITY_WEIGHTS,
    ) -> None:
        """
        Initialise le classeur.

        Args:
            season_extractor: Heuristique de saison (SeasonExtractor par defaut)
            weights: Ponderation de la similarite
        """
        self._extract_season = season_extractor or SeasonExtractor()
        self._weights = weights

    def type_penalty(
        self,
        expected_type: Optional[MediaFormat],
        candidate_type: Optional[MediaFormat],
    ) -> float:
        """
        Penalite de format entre le media source et un candidat.

        Les categories sont comparees apres correspondance (TV_SHORT -> TV);
        un format inconnu d'un cote ou de l'autre n'est pas penalise.
        """
        expected = map_format_category(expected_type)
        actual = map_format_category(candidate_type)
        if expected is None or actual is None or expected == actual:
            return 0.0
        return float(TYPE_MISMATCH_PENALTY)

    def score_pair(
        self,
        source_title: str,
        candidate_title: str,
        expected_season: Optional[int],
        type_penalty: float = 0.0,
    ) -> float:
        """
        Score une paire de titres normalises.

        Le score n'est pas plafonne a 100 (bonus de saison) mais ne descend
        jamais sous 0.
        """
        similarity = calculate_title_similarity(
            source_title, candidate_title, self._weights
        )
        score = max(0.0, similarity - type_penalty)

        if expected_season is not None:
            candidate_season = self._extract_season(candidate_title)
            if candidate_season is not None:
                if candidate_season == expected_season:
                    score += SEASON_MATCH_BONUS
                else:
                    score -= SEASON_MISMATCH_PENALTY

        return max(0.0, score)

    def rank(
        self,
        source_titles: Sequence[str],
        expected_season: Optional[int],
        expected_type: Optional[MediaFormat],
        candidates: Sequence[CatalogCandidate],
    ) -> Optional[ScoredCandidate]:
        """
        Return the best candidate with its score.

        Args:
            source_titles: Normalized AniList titles (comparison pool)
            expected_season: Season of the primary AniList title (or None)
            expected_type: AniList format (or None)
            candidates: Search results, in catalog order

        Returns:
            Best ScoredCandidate, or None if there are no candidates
        """
        best: Optional[ScoredCandidate] = None

        for candidate in candidates:
            penalty = self.type_penalty(expected_type, candidate.type)
            candidate_titles = [
                t for t in (normalize_title(n) for n in candidate.titles()) if t
            ]

            candidate_score = 0.0
            for source_title in source_titles:
                if not source_title:
                    continue
                for candidate_title in candidate_titles:
                    score = self.score_pair(
                        source_title, candidate_title, expected_season, penalty
                    )
                    candidate_score = max(candidate_score, score)

            # Strictement superieur: a egalite le premier candidat est garde
            if best is None or candidate_score > best.score:
                best = ScoredCandidate(candidate=candidate, score=candidate_score)

        return best
