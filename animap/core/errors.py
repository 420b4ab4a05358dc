"""
Taxonomie des erreurs de resolution.

Chaque echec de resolution est l'une des trois erreurs ci-dessous, jamais
un resultat partiel:
- NotFoundError : l'ID source n'existe pas sur AniList
- ProviderError : echec transport ou fournisseur (AniList ou anicrush)
- NoMatchError : toutes les variantes de titre ont ete essayees sans succes
"""

from typing import Optional, Sequence


class MappingError(Exception):
    """
    Erreur de base de la resolution.

    Attributes:
        source_id: ID AniList concerne (None si inconnu, ex: appel episodes)
    """

    def __init__(self, message: str, source_id: Optional[int] = None) -> None:
        self.source_id = source_id
        super().__init__(message)


class NotFoundError(MappingError):
    """Le media source n'existe pas chez le fournisseur de metadonnees."""

    def __init__(self, source_id: int) -> None:
        super().__init__(f"Anime {source_id} introuvable sur AniList", source_id)


class ProviderError(MappingError):
    """
    Echec d'un fournisseur (transport, statut HTTP, enveloppe status=false).

    N'est jamais relancee a ce niveau: la resolution en cours est abandonnee.

    Attributes:
        variant: Variante de titre en cours de recherche (None hors recherche)
        reason: Message d'origine du fournisseur
    """

    def __init__(
        self,
        reason: str,
        source_id: Optional[int] = None,
        variant: Optional[str] = None,
    ) -> None:
        self.reason = reason
        self.variant = variant
        message = reason
        if variant is not None:
            message = f"{reason} (recherche: {variant!r})"
        super().__init__(message, source_id)

    def with_context(self, source_id: int, variant: Optional[str]) -> "ProviderError":
        """Retourne une copie enrichie de l'ID source et de la variante."""
        return ProviderError(self.reason, source_id=source_id, variant=variant)


class NoMatchError(MappingError):
    """
    Aucune variante de titre n'a produit un candidat au-dessus du seuil.

    Attributes:
        variants: Variantes essayees, dans l'ordre
        best_score: Meilleur score observe (None si aucun candidat)
        threshold: Seuil d'acceptation applique
    """

    def __init__(
        self,
        source_id: int,
        variants: Sequence[str],
        best_score: Optional[float],
        threshold: float,
    ) -> None:
        self.variants = tuple(variants)
        self.best_score = best_score
        self.threshold = threshold
        best = f"{best_score:.2f}" if best_score is not None else "aucun candidat"
        super().__init__(
            f"Aucune correspondance anicrush pour l'anime {source_id} "
            f"({len(self.variants)} variante(s), meilleur score: {best}, seuil: {threshold})",
            source_id,
        )
