"""
Couche domaine (core).

Contient les entites metier, les ports (interfaces abstraites) et la
taxonomie d'erreurs. Cette couche n'a AUCUNE dependance vers
l'infrastructure (httpx, cache, frameworks).

Sous-packages :
- entities/ : Objets valeur (SourceMedia, CatalogCandidate, MatchResult...)
- ports/ : Interfaces abstraites des fournisseurs de metadonnees et de recherche
"""
