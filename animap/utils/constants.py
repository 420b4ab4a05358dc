"""
Constantes globales pour animap.

Ce module contient les parametres du moteur de resolution:
- Ponderation de la similarite (distance d'edition / recouvrement de mots)
- Seuil d'acceptation d'un candidat
- Ajustements de score (format, saison)
- Correspondance des formats AniList vers les categories anicrush
"""

from typing import NamedTuple, Optional

from animap.core.entities.media import MediaFormat


class SimilarityWeights(NamedTuple):
    """Poids de la similarite combinee (la somme doit valoir 1)."""

    edit: float
    token: float


# Ponderation distance d'edition / recouvrement de mots
SIMILARITY_WEIGHTS = SimilarityWeights(edit=0.4, token=0.6)

# Score minimum du meilleur candidat pour accepter une correspondance
DEFAULT_MATCH_THRESHOLD = 50

# Penalite quand les categories de format different
TYPE_MISMATCH_PENALTY = 15

# Ajustements quand les deux titres portent un numero de saison
SEASON_MATCH_BONUS = 25
SEASON_MISMATCH_PENALTY = 30

# Taille de page de la recherche anicrush
DEFAULT_SEARCH_LIMIT = 24

# Format AniList -> categorie anicrush (pas de TV_SHORT cote anicrush)
FORMAT_CATEGORY_MAPPING: dict[MediaFormat, Optional[MediaFormat]] = {
    MediaFormat.TV: MediaFormat.TV,
    MediaFormat.TV_SHORT: MediaFormat.TV,
    MediaFormat.MOVIE: MediaFormat.MOVIE,
    MediaFormat.SPECIAL: MediaFormat.SPECIAL,
    MediaFormat.OVA: MediaFormat.OVA,
    MediaFormat.ONA: MediaFormat.ONA,
    MediaFormat.MUSIC: MediaFormat.MUSIC,
    MediaFormat.UNKNOWN: None,
}
