"""Adaptateurs média : dépôt local et téléchargement des binaires."""

from devotional.adapters.media.http_downloader import HttpMediaDownloader
from devotional.adapters.media.local_storage import LocalMediaStorage

__all__ = [
    "HttpMediaDownloader",
    "LocalMediaStorage",
]
