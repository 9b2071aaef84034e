"""
Unités de lecture du fil vidéo.

Chaque vidéo du fil possède une PlaybackUnit : état de lecture, son coupé,
like local et téléchargement en cours. Les unités sont conservées dans un
PlaybackRegistry indexé par l'ID de la vidéo, jamais par la position dans
la liste affichée.

Machine d'états d'une unité :

    inactive --activate--> activating --play ok--> playing <--tap--> paused
                                      --échec---> autoplay_blocked --tap--> playing

deactivate() ramène toute unité en INACTIVE, quel que soit son état.
"""

from collections.abc import Coroutine, Iterator
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

from loguru import logger

from devotional.core.entities.video import Video
from devotional.core.ports.media import AutoplayRejected, DownloadError, IMediaElement
from devotional.services.download import DownloadService

ElementFactory = Callable[[Video], IMediaElement]

DOWNLOAD_FAILED_MESSAGE = "Echec du telechargement de la video"


class PlaybackState(Enum):
    """Etat de lecture d'une unité."""

    INACTIVE = "inactive"
    ACTIVATING = "activating"
    PLAYING = "playing"
    PAUSED = "paused"
    AUTOPLAY_BLOCKED = "autoplay_blocked"


class PlaybackUnit:
    """
    Etat de lecture d'une vidéo du fil.

    Le moteur d'activation envoie les signaux activate()/deactivate().
    L'utilisateur agit via tap(), toggle_mute(), toggle_like() et download().

    Une lecture automatique peut se résoudre après la désactivation de l'unité
    (défilement rapide). Chaque activation incrémente une génération : une
    résolution dont la génération n'est plus la courante est ignorée.
    """

    def __init__(self, video: Video, element: IMediaElement) -> None:
        self.video = video
        self._element = element
        self.state = PlaybackState.INACTIVE
        self.intended_active = False
        self.muted = False
        self.liked = False
        self.downloading = False
        self._generation = 0
        self._element.muted = False

    def __repr__(self) -> str:
        return f"PlaybackUnit(video={self.video.id!r}, state={self.state.value})"

    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.PLAYING

    @property
    def show_play_overlay(self) -> bool:
        """L'icône de lecture est affichée tant que la vidéo ne joue pas."""
        return self.state != PlaybackState.PLAYING

    @property
    def displayed_likes(self) -> int:
        """Compteur serveur augmenté du like local de la session."""
        return self.video.likes_count + (1 if self.liked else 0)

    def activate(self) -> Coroutine[Any, Any, None]:
        """
        Signal "devient active" : passe en ACTIVATING.

        Returns:
            La coroutine de tentative de lecture automatique, à planifier
            par l'appelant
        """
        self._generation += 1
        self.intended_active = True
        self.state = PlaybackState.ACTIVATING
        return self.attempt_autoplay(self._generation)

    def deactivate(self) -> None:
        """Signal "devient inactive" : pause forcée, retour en INACTIVE."""
        self._generation += 1
        self.intended_active = False
        self._element.pause()
        self.state = PlaybackState.INACTIVE

    async def attempt_autoplay(self, generation: Optional[int] = None) -> None:
        """
        Tente la lecture automatique.

        Un rejet de l'hôte, ou tout autre échec de play(), mène à
        AUTOPLAY_BLOCKED sans nouvelle tentative :
        l'unité attend un tap. Une résolution périmée est ignorée.
        """
        if generation is None:
            generation = self._generation

        try:
            await self._element.play()
        except AutoplayRejected as e:
            if generation != self._generation:
                logger.debug(f"Rejet d'autoplay perime ignore: {self.video.id}")
                return
            logger.debug(f"Autoplay bloque pour {self.video.id}: {e}")
            self.state = PlaybackState.AUTOPLAY_BLOCKED
            return
        except Exception as e:
            # Lecture interrompue ou média illisible : l'unité attend un tap
            if generation != self._generation:
                logger.debug(f"Echec d'autoplay perime ignore: {self.video.id}")
                return
            logger.warning(f"Echec de lecture pour {self.video.id}: {e!r}")
            self.state = PlaybackState.AUTOPLAY_BLOCKED
            return

        if generation != self._generation:
            logger.debug(f"Autoplay perime ignore: {self.video.id}")
            if not self.intended_active:
                # L'élément a pu démarrer après la désactivation
                self._element.pause()
            return

        self.state = PlaybackState.PLAYING

    async def tap(self) -> PlaybackState:
        """
        Geste utilisateur sur la vidéo : bascule lecture / pause.

        Sans effet tant que l'unité n'est pas active.
        """
        if self.state == PlaybackState.PLAYING:
            self._element.pause()
            self.state = PlaybackState.PAUSED
        elif self.state in (PlaybackState.PAUSED, PlaybackState.AUTOPLAY_BLOCKED):
            generation = self._generation
            try:
                await self._element.play()
            except AutoplayRejected as e:
                logger.debug(f"Lecture refusee malgre le tap pour {self.video.id}: {e}")
                return self.state
            except Exception as e:
                logger.warning(f"Echec de lecture apres le tap pour {self.video.id}: {e!r}")
                if generation == self._generation:
                    self.state = PlaybackState.AUTOPLAY_BLOCKED
                return self.state
            if generation == self._generation:
                self.state = PlaybackState.PLAYING
            elif not self.intended_active:
                self._element.pause()
        else:
            logger.debug(f"Tap ignore, unite {self.state.value}: {self.video.id}")
        return self.state

    def toggle_mute(self) -> bool:
        """Coupe ou rétablit le son, indépendamment de l'état de lecture."""
        self.muted = not self.muted
        self._element.muted = self.muted
        return self.muted

    def toggle_like(self) -> bool:
        """Bascule le like local (non persisté)."""
        self.liked = not self.liked
        return self.liked

    async def download(
        self,
        download_service: DownloadService,
        notify: Optional[Callable[[str], None]] = None,
    ) -> Optional[Path]:
        """
        Télécharge la vidéo vers un fichier local.

        L'échec est signalé à l'utilisateur et n'affecte jamais l'état de lecture.

        Returns:
            Le chemin du fichier créé, ou None si échec ou téléchargement déjà en cours
        """
        if self.downloading:
            return None

        self.downloading = True
        try:
            return await download_service.save(self.video)
        except DownloadError as e:
            logger.error(f"Telechargement echoue pour {self.video.id}: {e}")
            if notify is not None:
                notify(DOWNLOAD_FAILED_MESSAGE)
            return None
        finally:
            self.downloading = False


class PlaybackRegistry:
    """
    Unités de lecture indexées par ID de vidéo.

    Une vidéo a toujours la même unité, quelle que soit sa position
    affichée, ce qui préserve son son coupé et son like local.
    """

    def __init__(self, element_factory: ElementFactory) -> None:
        self._element_factory = element_factory
        self._units: dict[str, PlaybackUnit] = {}

    def unit_for(self, video: Video) -> PlaybackUnit:
        """Retourne l'unité de la vidéo, en la créant si nécessaire."""
        unit = self._units.get(video.id)
        if unit is None:
            unit = PlaybackUnit(video, self._element_factory(video))
            self._units[video.id] = unit
        return unit

    def get(self, video_id: str) -> Optional[PlaybackUnit]:
        return self._units.get(video_id)

    def playing(self) -> list[PlaybackUnit]:
        """Unités actuellement en lecture (au plus une en régime établi)."""
        return [unit for unit in self._units.values() if unit.is_playing]

    def __iter__(self) -> Iterator[PlaybackUnit]:
        return iter(self._units.values())

    def __len__(self) -> int:
        return len(self._units)
