"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Port repository : Contrat de persistance des données
- IRepository : Stockage générique (Series, Season, Episode)
- StorageError : Échec d'une opération de stockage

Port catalogue : Contrat pour la source de métadonnées externe
- ICatalogSource : Récupération du snapshot d'une série
- CatalogSnapshot / RawEpisode : Données brutes du catalogue
- SourceUnavailableError / SeriesNotFoundError : Erreurs de la source
"""

from src.core.ports.catalog import (
    CatalogSnapshot,
    ICatalogSource,
    RawEpisode,
    SeriesNotFoundError,
    SourceUnavailableError,
)
from src.core.ports.repositories import IRepository, StorageError

__all__ = [
    # Repository
    "IRepository",
    "StorageError",
    # Catalogue
    "ICatalogSource",
    "CatalogSnapshot",
    "RawEpisode",
    "SeriesNotFoundError",
    "SourceUnavailableError",
]
