"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- SortDirection : Sens de tri (asc/desc, encodage numerique -1/1)
- SortKey : Champs triables de la liste des episodes manquants
- PageRequest : Demande de page (index, taille, tri)
- Page : Tranche de resultats avec le total des enregistrements
"""

from src.core.value_objects.paging import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    Page,
    PageRequest,
    SortDirection,
    SortKey,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "Page",
    "PageRequest",
    "SortDirection",
    "SortKey",
]
