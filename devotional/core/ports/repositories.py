"""
Interfaces ports pour les repositories.

Interface abstraite (port) définissant le contrat du store de contenu.
Les implémentations (adaptateurs) fournissent le mécanisme de stockage concret
(SQLite via SQLModel, en mémoire pour les tests, etc.).

Le store n'offre que des opérations simples : filtre par statut, tri par date,
mise à jour d'un champ, insertion. Les erreurs de transport sont converties
en FetchError (lecture) ou UpdateError (écriture) par l'adaptateur.
"""

from abc import ABC, abstractmethod
from typing import Optional

from devotional.core.entities.video import Video, VideoDraft, VideoStatus


class FetchError(Exception):
    """Echec de lecture depuis le store (fil ou file de modération)."""


class UpdateError(Exception):
    """Echec d'écriture d'un statut dans le store."""


class VideoNotFoundError(UpdateError):
    """
    La vidéo visée par une mise à jour n'existe pas.

    Attributes:
        video_id: Identifiant introuvable
    """

    def __init__(self, video_id: str) -> None:
        self.video_id = video_id
        super().__init__(f"Video introuvable: {video_id}")


class StaleStatusError(UpdateError):
    """
    Mise à jour conditionnelle refusée : le statut a changé entre-temps.

    Levée quand un autre modérateur a déjà tranché la même vidéo.

    Attributes:
        video_id: Identifiant de la vidéo
        expected: Statut attendu par l'appelant
        actual: Statut trouvé dans le store
    """

    def __init__(
        self, video_id: str, expected: VideoStatus, actual: VideoStatus
    ) -> None:
        self.video_id = video_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Statut de {video_id} deja modifie: attendu {expected.value}, "
            f"trouve {actual.value}"
        )


class IVideoRepository(ABC):
    """
    Interface de stockage des vidéos.

    Définit les opérations pour persister et récupérer les entités Video.
    """

    @abstractmethod
    def query(self, status: VideoStatus, newest_first: bool = True) -> list[Video]:
        """
        Liste les vidéos d'un statut donné, triées par date de création.

        Args :
            status : Statut à filtrer
            newest_first : Tri décroissant sur created_at (défaut)

        Raises :
            FetchError : Si le store est indisponible
        """
        ...

    @abstractmethod
    def get_by_id(self, video_id: str) -> Optional[Video]:
        """Récupère une vidéo par son ID. Lève FetchError si le store est indisponible."""
        ...

    @abstractmethod
    def update_status(
        self,
        video_id: str,
        status: VideoStatus,
        expected_status: Optional[VideoStatus] = None,
    ) -> None:
        """
        Ecrase le statut d'une vidéo.

        Sans expected_status, l'écriture est un simple écrasement (dernier
        écrivain gagnant). Avec expected_status, l'écriture n'a lieu que si
        le statut courant correspond.

        Raises :
            VideoNotFoundError : Si l'ID est inconnu
            StaleStatusError : Si le statut courant diffère de expected_status
            UpdateError : Pour toute autre erreur du store
        """
        ...

    @abstractmethod
    def insert(self, draft: VideoDraft) -> Video:
        """Insère un brouillon. La vidéo créée est toujours en statut PENDING."""
        ...
