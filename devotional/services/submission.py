"""
Service de soumission des vidéos.

Contrôle le fichier (taille, type) et les métadonnées (titre, description)
avant de déposer le binaire et d'insérer la vidéo. Le contenu de la vidéo
elle-même n'est jamais analysé.

Toute vidéo soumise entre dans le store en statut PENDING et n'apparaîtra
dans le fil qu'après approbation d'un modérateur.
"""

import mimetypes
from pathlib import Path

from loguru import logger

from devotional.config import Settings
from devotional.core.entities.video import Video, VideoDraft
from devotional.core.ports.media import IMediaStorage
from devotional.core.ports.repositories import IVideoRepository, UpdateError

mimetypes.add_type("video/webm", ".webm")
mimetypes.add_type("video/mp4", ".mp4")


class SubmissionError(Exception):
    """Soumission refusée ou échouée. Le message est destiné à l'utilisateur."""


class SubmissionService:
    """
    Soumission d'une vidéo par un utilisateur connecté.

    Example:
        service = SubmissionService(video_repo=repo, storage=storage, settings=settings)
        video = service.submit("user-1", Path("aarti.mp4"), title="Aarti du matin")
    """

    def __init__(
        self,
        video_repo: IVideoRepository,
        storage: IMediaStorage,
        settings: Settings,
    ) -> None:
        self._video_repo = video_repo
        self._storage = storage
        self._settings = settings

    def validate_file(self, source: Path) -> str:
        """
        Vérifie qu'un fichier peut être soumis.

        Returns:
            Le type MIME du fichier

        Raises:
            SubmissionError: Fichier absent, trop volumineux ou de type non accepté
        """
        if not source.is_file():
            raise SubmissionError(f"Fichier introuvable: {source}")

        if source.stat().st_size > self._settings.max_upload_size_bytes:
            raise SubmissionError(
                f"Fichier trop volumineux. Maximum {self._settings.max_upload_size_mb} Mo."
            )

        mime_type, _ = mimetypes.guess_type(source.name)
        if mime_type not in self._settings.allowed_video_types:
            accepted = ", ".join(self._settings.allowed_video_types)
            raise SubmissionError(f"Type de fichier non accepte ({mime_type}). Types: {accepted}")
        return mime_type

    def validate_metadata(self, title: str, description: str) -> tuple[str, str]:
        """Vérifie titre (obligatoire) et description, retourne les valeurs nettoyées."""
        title = title.strip()
        description = description.strip()

        if not title:
            raise SubmissionError("Le titre est obligatoire.")
        if len(title) > self._settings.title_max_length:
            raise SubmissionError(
                f"Titre trop long ({len(title)} > {self._settings.title_max_length} caracteres)."
            )
        if len(description) > self._settings.description_max_length:
            raise SubmissionError(
                f"Description trop longue ({len(description)} > "
                f"{self._settings.description_max_length} caracteres)."
            )
        return title, description

    def submit(self, owner: str, source: Path, title: str, description: str = "") -> Video:
        """
        Soumet une vidéo : contrôles, dépôt du binaire, insertion en PENDING.

        Args:
            owner: Identifiant de l'utilisateur connecté
            source: Fichier vidéo local
            title: Titre (obligatoire)
            description: Description (optionnelle)

        Raises:
            SubmissionError: Si un contrôle échoue ou si le dépôt/l'insertion échoue
        """
        if not owner:
            raise SubmissionError("Vous devez etre connecte pour soumettre une video.")

        self.validate_file(source)
        title, description = self.validate_metadata(title, description)

        try:
            media_reference = self._storage.upload(owner, source)
        except OSError as e:
            logger.error(f"Erreur lors du depot de {source}: {e}")
            raise SubmissionError("Echec du depot de la video.") from e

        try:
            video = self._video_repo.insert(
                VideoDraft(
                    owner=owner,
                    media_reference=media_reference,
                    title=title,
                    description=description,
                )
            )
        except UpdateError as e:
            logger.error(f"Erreur lors de l'insertion de la video: {e}")
            raise SubmissionError("Echec de l'enregistrement de la video.") from e

        logger.info(f"Video soumise {video.id} par {owner}: {title}")
        return video
