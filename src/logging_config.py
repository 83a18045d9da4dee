"""
Configuration du logging de l'application via loguru.

Fournit un logging structuré avec :
- Sortie console : lisible, colorée, avec le contexte lié (series_id...)
- Sortie fichier : sérialisée en JSON, avec rotation, pour l'analyse des synchronisations

Les services reçoivent un logger injecté (par défaut le logger loguru global)
et le lient au contexte de chaque exécution via run_logger().
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/episync.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau de log minimum pour la sortie console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin vers le fichier de log
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB", "1 GB")
        retention_count : Nombre de fichiers rotatifs à conserver
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
            "<level>{message}</level> <dim>{extra}</dim>"
        ),
        colorize=True,
    )

    # Fichier JSON : les compteurs de synchronisation y sont exploitables
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="TRACE",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # Thread-safe
    )

    logger.debug("Logging configuré", log_file=str(log_file), rotation=rotation_size)


def run_logger(base: Any = None, **context: Any) -> Any:
    """
    Retourne un logger lié au contexte d'une exécution.

    Args :
        base : Logger injecté (défaut : logger loguru global)
        **context : Contexte ajouté à chaque message (ex: series_id=81189)
    """
    return (base or logger).bind(**context)
