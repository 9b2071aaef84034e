"""
Services de modération des vidéos soumises.

Deux points d'entrée :
- ModerationQueueController : file locale des vidéos en attente, décisions
  appliquées de façon optimiste puis confirmées par le store
- ModerationService : décision ponctuelle sur une vidéo par son ID
  (lecture, machine d'états, écriture conditionnelle)

Réconciliation de la file : en cas d'échec d'écriture, la vidéo retirée
n'est pas réinsérée à sa position d'origine. La file entière est rechargée
depuis le store. Selon que l'écriture a réellement échoué ou non, la vidéo
réapparaît à sa position rechargée ou reste absente.
"""

from typing import Callable, Optional

from loguru import logger

from devotional.core.entities.video import ModerationDecision, Video, VideoStatus
from devotional.core.ports.repositories import (
    FetchError,
    IVideoRepository,
    UpdateError,
    VideoNotFoundError,
)
from devotional.services.visibility import apply_decision, is_queued, next_status

Notifier = Callable[[str], None]
QueueListener = Callable[[list[Video]], None]

UPDATE_FAILED_MESSAGE = "Echec de la mise a jour du statut"
RELOAD_FAILED_MESSAGE = "Impossible de recharger la file de moderation"


class ModerationQueueController:
    """
    Contrôleur de la file de modération (une instance par vue modérateur).

    La file locale est un cache au-dessus du store : elle ne contient que des
    vidéos PENDING, triées de la plus récente à la plus ancienne.

    Example:
        controller = ModerationQueueController(video_repo, notify=console.print)
        controller.load_queue()
        controller.decide(video_id, ModerationDecision.APPROVE)
    """

    def __init__(
        self,
        video_repo: IVideoRepository,
        notify: Optional[Notifier] = None,
        on_change: Optional[QueueListener] = None,
        conditional_update: bool = True,
    ) -> None:
        """
        Initialise le contrôleur.

        Args:
            video_repo: Store de contenu
            notify: Notification ponctuelle à l'utilisateur (optionnel)
            on_change: Appelé avec la file locale après chaque modification (optionnel)
            conditional_update: N'écrire que si la vidéo est encore PENDING dans le store
        """
        self._video_repo = video_repo
        self._notify = notify
        self._on_change = on_change
        self._conditional_update = conditional_update
        self._queue: list[Video] = []
        self.loading = False

    @property
    def queue(self) -> list[Video]:
        """Copie de la file locale."""
        return list(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, video_id: object) -> bool:
        return any(video.id == video_id for video in self._queue)

    def load_queue(self) -> list[Video]:
        """
        Recharge la file depuis le store.

        Returns:
            Les vidéos en attente, plus récentes d'abord

        Raises:
            FetchError: Si le store est indisponible (file locale inchangée)
        """
        self.loading = True
        try:
            videos = self._video_repo.query(VideoStatus.PENDING, newest_first=True)
        except FetchError as e:
            logger.error(f"Erreur lors du chargement de la file de moderation: {e}")
            raise
        finally:
            self.loading = False

        # Le store est la référence, mais la file ne doit jamais exposer autre chose que PENDING
        self._queue = [video for video in videos if is_queued(video.status)]
        logger.debug(f"File de moderation chargee: {len(self._queue)} video(s)")
        self._changed()
        return self.queue

    def decide(self, video_id: str, decision: ModerationDecision) -> bool:
        """
        Applique la décision d'un modérateur.

        1. Retire immédiatement la vidéo de la file locale (mise à jour optimiste)
        2. Envoie la transition au store
        3. En cas d'UpdateError : notifie puis recharge toute la file

        Une décision sur un ID absent de la file locale (double clic, décision
        déjà prise) est ignorée : aucun appel au store.

        Returns:
            True si le store a confirmé la transition, False sinon
        """
        video = next((v for v in self._queue if v.id == video_id), None)
        if video is None:
            logger.debug(f"Decision ignoree, video absente de la file: {video_id}")
            return False

        new_status = next_status(video.status, decision)

        self._queue = [v for v in self._queue if v.id != video_id]
        self._changed()

        expected = VideoStatus.PENDING if self._conditional_update else None
        try:
            self._video_repo.update_status(video_id, new_status, expected_status=expected)
        except UpdateError as e:
            logger.error(f"Erreur lors de la mise a jour du statut de {video_id}: {e}")
            self._send(UPDATE_FAILED_MESSAGE)
            self._reload_after_failure()
            return False

        logger.info(f"Video {video_id} -> {new_status.value}")
        return True

    def _reload_after_failure(self) -> None:
        """Recharge la file après un échec ; une nouvelle erreur est signalée, jamais propagée."""
        try:
            self.load_queue()
        except FetchError:
            self._send(RELOAD_FAILED_MESSAGE)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.queue)

    def _send(self, message: str) -> None:
        if self._notify is not None:
            self._notify(message)


class ModerationService:
    """
    Décision de modération ponctuelle, sans file locale.

    Utilisé par la CLI (approve / ban) : la vidéo est relue depuis le store,
    la machine d'états valide la transition, puis l'écriture est envoyée.
    """

    def __init__(
        self, video_repo: IVideoRepository, conditional_update: bool = True
    ) -> None:
        self._video_repo = video_repo
        self._conditional_update = conditional_update

    def list_pending(self) -> list[Video]:
        """Liste les vidéos en attente, plus récentes d'abord."""
        return self._video_repo.query(VideoStatus.PENDING, newest_first=True)

    def review(self, video_id: str, decision: ModerationDecision) -> Video:
        """
        Applique une décision sur une vidéo.

        Args:
            video_id: ID de la vidéo
            decision: APPROVE ou BAN

        Returns:
            La vidéo avec son nouveau statut

        Raises:
            VideoNotFoundError: Si l'ID est inconnu
            IllegalTransitionError: Si la vidéo n'est plus en attente
            UpdateError: Si l'écriture échoue (dont StaleStatusError)
        """
        video = self._video_repo.get_by_id(video_id)
        if video is None:
            raise VideoNotFoundError(video_id)

        previous = video.status
        apply_decision(video, decision)

        expected = previous if self._conditional_update else None
        try:
            self._video_repo.update_status(video_id, video.status, expected_status=expected)
        except UpdateError:
            video.status = previous
            raise

        logger.info(f"Video {video_id} -> {video.status.value}")
        return video
