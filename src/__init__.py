"""
EpiSync - Synchronisation des métadonnées d'épisodes TV.

Ce package synchronise les saisons et épisodes des séries suivies depuis
TVDB vers une base locale, et expose la liste paginée des épisodes manquants
(diffusés mais sans fichier associé).

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (réconciliation, requêtes)
- adapters/ : Couche infrastructure (CLI, client TVDB)
- infrastructure/ : Persistance SQLModel
- web/ : API JSON FastAPI
"""
