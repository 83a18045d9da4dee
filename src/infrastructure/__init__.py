"""
Couche infrastructure d'EpiSync.

Implementations concretes des ports de stockage :

- persistence/ : Stockage SQLite avec SQLModel (modeles et repository generique)
  et repository en memoire pour les tests

Architecture hexagonale : changer de base (ex: PostgreSQL au lieu de SQLite)
ne modifie pas la logique metier.
"""
