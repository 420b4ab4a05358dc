"""
Extraction heuristique du numero de saison d'un titre.

Deux regles, dans l'ordre:
1. Mot-cle "season", "cour" ou "part" suivi de 1 ou 2 chiffres
2. Sinon, 1 ou 2 chiffres en fin de titre, retenus seulement si < 10

La regle 2 est ambigue (un titre finissant par un petit nombre qui n'est
pas une saison est mal interprete). Elle est isolee derriere SeasonExtractor
pour pouvoir etre remplacee sans toucher au classement des candidats.

La regle 2 ne lit pas les deux derniers chiffres d'un nombre plus long:
"fruits basket 2001" ne donne pas la saison 1, une annee n'est jamais
prise pour un numero de saison.
"""

import re
from typing import Optional

_SEASON_KEYWORD = re.compile(r"(?:season|cour|part)\s*(\d{1,2})")
# Le lookbehind evite de capturer la fin d'une annee ("2003" -> 3)
_TRAILING_NUMBER = re.compile(r"(?<!\d)(\d{1,2})\s*$")

MAX_TRAILING_SEASON = 10


def extract_season_number(title: Optional[str]) -> Optional[int]:
    """
    Extract a season / cour / part number from a title.

    Args:
        title: Raw or normalized title

    Returns:
        The season number, or None when no heuristic applies
    """
    if not title:
        return None
    lower = title.lower()

    match = _SEASON_KEYWORD.search(lower)
    if match:
        return int(match.group(1))

    match = _TRAILING_NUMBER.search(lower)
    if match:
        number = int(match.group(1))
        if number < MAX_TRAILING_SEASON:
            return number

    return None


class SeasonExtractor:
    """
    Extracteur de saison par defaut, injectable dans CandidateRanker.

    Toute fonction Callable[[str], Optional[int]] peut le remplacer.
    """

    def __call__(self, title: Optional[str]) -> Optional[int]:
        return extract_season_number(title)
