"""
Dépôt local des fichiers vidéo.

Implémente IMediaStorage en copiant les fichiers sous media_dir/<owner>/
avec un nom aléatoire, et retourne l'URL publique correspondante.
"""

import shutil
from pathlib import Path
from uuid import uuid4

from loguru import logger

from devotional.core.ports.media import IMediaStorage


class LocalMediaStorage(IMediaStorage):
    """
    Stockage des vidéos dans un répertoire local.

    Example:
        storage = LocalMediaStorage(Path("~/Videos/devotional"), "https://cdn.example.org/videos")
        url = storage.upload("user-1", Path("aarti.mp4"))
        # https://cdn.example.org/videos/user-1/3f2a...c1.mp4
    """

    def __init__(self, media_dir: Path, base_url: str) -> None:
        self._media_dir = media_dir
        self._base_url = base_url.rstrip("/")

    def upload(self, owner: str, source: Path) -> str:
        """Copie le fichier sous <media_dir>/<owner>/<uuid>.<ext> et retourne son URL."""
        name = f"{uuid4().hex}{source.suffix.lower()}"
        destination = self._media_dir / owner / name
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)

        logger.debug(f"Fichier depose: {source} -> {destination}")
        return f"{self._base_url}/{owner}/{name}"
