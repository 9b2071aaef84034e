"""
Service de téléchargement local des vidéos.

Récupère le binaire d'une vidéo via un IMediaDownloader et l'enregistre
sous download_dir avec un nom "devotional-<titre>.mp4".
"""

import re
from pathlib import Path

from loguru import logger

from devotional.core.entities.video import Video
from devotional.core.ports.media import DownloadError, IMediaDownloader

# Caractères interdits dans un nom de fichier (Windows compris)
_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def download_filename(video: Video) -> str:
    """Nom du fichier local : devotional-<titre ou "video">.mp4."""
    title = _UNSAFE_CHARS.sub("_", video.title).strip() or "video"
    return f"devotional-{title}.mp4"


class DownloadService:
    """
    Enregistre une vidéo dans le répertoire de téléchargement.

    Example:
        service = DownloadService(downloader=HttpMediaDownloader(), download_dir=Path("~/Downloads"))
        path = await service.save(video)
    """

    def __init__(self, downloader: IMediaDownloader, download_dir: Path) -> None:
        self._downloader = downloader
        self._download_dir = download_dir

    async def save(self, video: Video) -> Path:
        """
        Télécharge la vidéo et l'écrit sur le disque.

        Returns:
            Chemin du fichier créé

        Raises:
            DownloadError: Si la récupération ou l'écriture échoue
        """
        content = await self._downloader.fetch(video.media_reference)

        target = self._download_dir / download_filename(video)
        try:
            self._download_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            raise DownloadError(f"Ecriture impossible de {target}: {e}") from e

        logger.info(f"Video {video.id} telechargee: {target}")
        return target
