"""
Interfaces ports pour les médias.

Contrats pour les collaborateurs externes manipulant les fichiers vidéo :
- IMediaStorage : dépôt du binaire et obtention d'une URL publique
- IMediaElement : élément de lecture fourni par l'hôte (lecture, pause, son)
- IMediaDownloader : récupération du binaire pour sauvegarde locale
"""

from abc import ABC, abstractmethod
from pathlib import Path


class AutoplayRejected(Exception):
    """
    L'hôte a refusé la lecture automatique.

    Ce n'est pas une vraie erreur : une politique de l'environnement
    (navigateur, lecteur) impose un geste utilisateur avant la lecture.
    """


class DownloadError(Exception):
    """Echec du téléchargement d'une vidéo vers un fichier local."""


class IMediaStorage(ABC):
    """Interface de dépôt des fichiers vidéo."""

    @abstractmethod
    def upload(self, owner: str, source: Path) -> str:
        """
        Dépose un fichier vidéo et retourne son URL publique.

        Args :
            owner : Identifiant de l'utilisateur propriétaire
            source : Chemin du fichier à déposer

        Retourne :
            L'URL publique (media_reference) du fichier déposé
        """
        ...


class IMediaElement(ABC):
    """
    Elément de lecture vidéo fourni par l'hôte.

    L'attribut muted est lu et écrit directement.
    """

    muted: bool = False

    @abstractmethod
    async def play(self) -> None:
        """
        Démarre la lecture.

        Raises :
            AutoplayRejected : Si l'hôte refuse la lecture sans geste utilisateur
        """
        ...

    @abstractmethod
    def pause(self) -> None:
        """Met la lecture en pause."""
        ...


class IMediaDownloader(ABC):
    """Interface de récupération du binaire d'une vidéo."""

    @abstractmethod
    async def fetch(self, url: str) -> bytes:
        """
        Récupère le contenu binaire à l'URL donnée.

        Raises :
            DownloadError : Si la récupération échoue
        """
        ...
