"""
Fonctions utilitaires partagees dans le projet animap.

Ce module centralise les fonctions reutilisees a travers le codebase :
- normalize_title : forme canonique d'un titre pour comparaison
- map_format_category : format AniList -> categorie comparable anicrush
"""

import re
from typing import Optional

from animap.core.entities.media import MediaFormat
from animap.utils.constants import FORMAT_CATEGORY_MAPPING

# Tout ce qui n'est ni ASCII alphanumerique ni ecriture CJK/kana/pleine chasse
_NON_TITLE_CHARS = re.compile(
    r"[^a-z0-9\u3000-\u303f\u3040-\u309f\u30a0-\u30ff\u4e00-\u9faf\uff00-\uff9f]"
)
_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: Optional[str]) -> str:
    """
    Normalise un titre pour la comparaison.

    Met en minuscules, remplace par un espace tout caractere hors [a-z0-9]
    et hors blocs CJK/kana/pleine chasse, fusionne les espaces et rogne.
    La fonction est idempotente: normalize_title(normalize_title(x))
    == normalize_title(x).

    Args:
        title: Titre brut (None ou vide accepte)

    Returns:
        Titre normalise, chaine vide si l'entree est vide
    """
    if not title:
        return ""
    text = _NON_TITLE_CHARS.sub(" ", title.lower())
    return _WHITESPACE.sub(" ", text).strip()


def map_format_category(media_format: Optional[MediaFormat]) -> Optional[MediaFormat]:
    """
    Convertit un format en categorie comparable entre les deux catalogues.

    TV_SHORT devient TV; UNKNOWN (ou None) ne donne aucune categorie.
    """
    if media_format is None:
        return None
    return FORMAT_CATEGORY_MAPPING[media_format]
