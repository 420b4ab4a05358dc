"""
animap - Resolution d'un anime AniList vers sa fiche anicrush.

Ce package fait correspondre un identifiant AniList a la meilleure fiche
du catalogue anicrush, qui n'expose qu'une recherche par mots-cles.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, erreurs)
- services/ : Couche application (normalisation, scoring, resolution)
- adapters/ : Couche infrastructure (clients API AniList et anicrush)
- web/ : API HTTP FastAPI
"""

__version__ = "0.1.0"
