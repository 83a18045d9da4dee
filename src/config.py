"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe EPISYNC_,
et peut optionnellement être fournie via un fichier .env.

La clé API TVDB est optionnelle - la synchronisation est désactivée si non fournie.
"""

from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

# Plus petite date acceptee par un DATETIME SQL Server
DEFAULT_AIR_DATE_FLOOR = date(1753, 1, 1)


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe EPISYNC_.
    Exemple : EPISYNC_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="EPISYNC_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///episync.db")

    # Catalogue TVDB (OPTIONNEL - synchronisation désactivée si non définie)
    tvdb_api_key: Optional[str] = Field(default=None)
    tvdb_language: str = Field(default="en")
    catalog_cache_dir: Path = Field(default=Path(".cache/api"))
    catalog_cache_ttl: int = Field(default=3600, ge=0)  # 0 = pas de cache

    # Réconciliation : les dates antérieures sont ramenées à cette date
    air_date_floor: date = Field(default=DEFAULT_AIR_DATE_FLOOR)

    # Épisodes manquants
    missing_page_size: int = Field(default=15, ge=1)
    max_page_size: int = Field(default=250, ge=1)
    include_specials: bool = Field(default=False)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/episync.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("catalog_cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tvdb_enabled(self) -> bool:
        """Vérifie si l'API TVDB est configurée."""
        return bool(self.tvdb_api_key)
