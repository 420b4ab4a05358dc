"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Les ports sont les frontieres de l'architecture hexagonale. Ils definissent
ce dont le moteur de resolution a besoin du monde exterieur sans specifier
comment ces besoins sont satisfaits.

- IMetadataProvider : Metadonnees du catalogue source (AniList)
- ICatalogSearchProvider : Recherche par mot-cle du catalogue cible (anicrush)
"""

from animap.core.ports.api_clients import (
    ICatalogSearchProvider,
    IMetadataProvider,
)

__all__ = [
    "ICatalogSearchProvider",
    "IMetadataProvider",
]
