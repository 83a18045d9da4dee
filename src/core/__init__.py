"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), et objets valeur.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entités métier (Series, Season, Episode)
- ports/ : Interfaces abstraites (repository générique, source catalogue)
- value_objects/ : Objets valeur immutables (pagination, sens de tri)
"""
