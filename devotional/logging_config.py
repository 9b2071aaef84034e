"""
Configuration du logging via loguru.

Deux sorties :
- stderr colorée, désactivable (mode --quiet de la CLI)
- fichier JSON avec rotation, qui reçoit toujours tous les niveaux
"""

import sys
from pathlib import Path

from loguru import logger

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/devotional.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
    console: bool = True,
) -> None:
    """Installe les handlers loguru de l'application.

    Args :
        log_level : Niveau minimum de la sortie console
        log_file : Fichier de log JSON (répertoire parent créé si absent)
        rotation_size : Taille avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conservés
        console : False pour ne rien écrire sur stderr
    """
    logger.remove()

    if console:
        logger.add(sys.stderr, level=log_level, format=_CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configuré", log_file=str(log_file), console=console)
