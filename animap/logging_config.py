"""
Mise en place des sorties loguru d'animap.

- stderr : lignes colorees pour l'utilisateur (stdout reste libre pour
  la sortie JSON de `animap map --json`)
- fichier optionnel : un objet JSON par ligne, avec rotation et compression
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> "
    "<level>{level: <7}</level> "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def _add_json_file(path: Path, rotation_size: str, retention_count: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        path,
        level="DEBUG",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Remplace les handlers loguru par ceux d'animap.

    Args :
        log_level : Niveau minimum affiche sur stderr
        log_file : Journal JSON (toujours au niveau DEBUG); None pour s'en passer
        rotation_size : Taille declenchant la rotation du journal
        retention_count : Nombre de journaux archives conserves
    """
    logger.remove()
    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    if log_file is not None:
        _add_json_file(log_file, rotation_size, retention_count)
        logger.debug(f"Journal JSON: {log_file}")
