"""
Interfaces ports pour les fournisseurs externes.

Interfaces abstraites (ports) definissant les contrats dont le moteur de
resolution a besoin. Les implementations (adaptateurs) fournissent les
clients concrets (AniList pour les metadonnees, anicrush pour la recherche).

Les implementations traduisent toute erreur transport en ProviderError.
"""

from abc import ABC, abstractmethod
from typing import Optional

from animap.core.entities.media import CatalogSearchResponse, SourceMedia


class IMetadataProvider(ABC):
    """
    Fournisseur des metadonnees du catalogue source (AniList).
    """

    @abstractmethod
    async def get_media(self, media_id: int) -> Optional[SourceMedia]:
        """
        Recupere un media par son ID.

        Args :
            media_id : ID numerique du catalogue source

        Retourne :
            Le media, ou None si l'ID n'existe pas

        Leve :
            ProviderError : echec transport ou reponse invalide
        """
        ...


class ICatalogSearchProvider(ABC):
    """
    Recherche plein texte dans le catalogue cible (anicrush).
    """

    @abstractmethod
    async def search(
        self,
        keyword: str,
        page: int = 1,
        limit: int = 24,
    ) -> CatalogSearchResponse:
        """
        Recherche des fiches par mot-cle.

        Args :
            keyword : Texte recherche (un titre)
            page : Page de resultats (1-indexee)
            limit : Nombre maximum de resultats

        Retourne :
            L'enveloppe de reponse; status=False signale un echec fournisseur

        Leve :
            ProviderError : echec transport
        """
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant du catalogue (ex: 'anicrush')."""
        ...
