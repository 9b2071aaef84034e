"""
Téléchargement des binaires vidéo.

Implémente IMediaDownloader avec httpx pour les URLs http(s), et une
lecture directe pour les URLs file:// produites par le stockage local.

Usage:
    downloader = HttpMediaDownloader(timeout=30.0)
    content = await downloader.fetch("https://cdn.example.org/videos/u1/abc.mp4")
    await downloader.close()
"""

from pathlib import Path
from typing import Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from devotional.core.ports.media import DownloadError, IMediaDownloader


class HttpMediaDownloader(IMediaDownloader):
    """
    Récupération des vidéos par HTTP.

    Aucune nouvelle tentative : un échec est converti en DownloadError
    et signalé tel quel à l'utilisateur.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le crée si nécessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self._client

    async def fetch(self, url: str) -> bytes:
        """
        Récupère le contenu à l'URL donnée.

        Raises:
            DownloadError: URL invalide, réponse HTTP en erreur, erreur réseau
                ou fichier illisible
        """
        try:
            parsed = urlparse(url)
            if parsed.scheme == "file":
                return Path(url2pathname(parsed.path)).read_bytes()

            response = await self._get_client().get(url)
            response.raise_for_status()
        except OSError as e:
            raise DownloadError(f"Lecture impossible de {url}: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise DownloadError(f"Telechargement impossible de {url}: {e}") from e
        return response.content

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
