"""
Moteur d'activation du fil vidéo.

Le fil est une pile verticale de vidéos approuvées, une par hauteur d'écran.
La vidéo active (seule à jouer et à être audible) est déduite de la position
de défilement, jamais d'une sélection explicite :

    index = arrondi(offset / hauteur_ecran), borné à [0, len - 1]

Seul un changement réel d'index déclenche des signaux. L'ancienne unité
reçoit "inactive" (pause forcée) avant que la nouvelle reçoive "active"
(tentative d'autoplay), si bien qu'aucune transition ne laisse deux vidéos
en lecture. Les tentatives d'autoplay sont lancées sans être attendues.
"""

import asyncio
import math
from collections.abc import Coroutine, Sequence
from typing import Any, Callable, Optional

from loguru import logger

from devotional.core.entities.video import Video, VideoStatus
from devotional.core.ports.repositories import FetchError, IVideoRepository
from devotional.services.playback import ElementFactory, PlaybackRegistry, PlaybackUnit
from devotional.services.visibility import is_publicly_visible

Spawner = Callable[[Coroutine[Any, Any, None]], Any]

# Références fortes vers les tâches d'autoplay en cours
_background_tasks: set[asyncio.Task] = set()


def spawn_in_loop(coro: Coroutine[Any, Any, None]) -> asyncio.Task:
    """Planifie la coroutine dans la boucle asyncio courante, sans l'attendre."""
    task = asyncio.get_running_loop().create_task(coro)
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return task


def compute_active_index(offset: float, viewport_height: float, count: int) -> Optional[int]:
    """
    Calcule l'index actif depuis la position de défilement.

    L'arrondi se fait au demi supérieur (1.5 -> 2), puis l'index est borné
    à la séquence (le défilement avec inertie peut dépasser les bords).

    Args:
        offset: Position de défilement verticale en pixels
        viewport_height: Hauteur d'un écran en pixels (> 0)
        count: Nombre de vidéos dans le fil

    Returns:
        L'index actif, ou None si le fil est vide

    Raises:
        ValueError: Si viewport_height n'est pas strictement positive
    """
    if count <= 0:
        return None
    if viewport_height <= 0:
        raise ValueError(f"Hauteur d'ecran invalide: {viewport_height}")
    index = math.floor(offset / viewport_height + 0.5)
    return max(0, min(index, count - 1))


class FeedActivationEngine:
    """
    Session de fil : séquence de vidéos visibles et index actif.

    Le moteur possède l'état "vidéo active" et le transmet aux unités de
    lecture par signaux explicites. Créé à l'ouverture du fil (start),
    abandonné à sa fermeture (stop).

    Avec le planificateur par défaut, start() et on_scroll() doivent être
    appelés depuis une boucle asyncio en cours d'exécution (RuntimeError sinon).

    Example:
        engine = FeedActivationEngine(videos, PlaybackRegistry(make_element))
        engine.start()
        engine.on_scroll(1600, 800)  # active l'index 2
    """

    def __init__(
        self,
        videos: Sequence[Video],
        registry: PlaybackRegistry,
        spawn: Optional[Spawner] = None,
    ) -> None:
        """
        Initialise le moteur.

        Args:
            videos: Vidéos du fil, dans l'ordre d'affichage
            registry: Unités de lecture indexées par ID
            spawn: Planificateur des tentatives d'autoplay (défaut: boucle asyncio courante)
        """
        visible = [video for video in videos if is_publicly_visible(video.status)]
        if len(visible) != len(videos):
            logger.warning(
                f"{len(videos) - len(visible)} video(s) non approuvee(s) ecartee(s) du fil"
            )
        self._videos: tuple[Video, ...] = tuple(visible)
        self._registry = registry
        self._spawn = spawn or spawn_in_loop
        self.active_index: Optional[int] = None

    @property
    def videos(self) -> tuple[Video, ...]:
        return self._videos

    @property
    def registry(self) -> PlaybackRegistry:
        return self._registry

    @property
    def active_unit(self) -> Optional[PlaybackUnit]:
        if self.active_index is None:
            return None
        return self.unit_at(self.active_index)

    def unit_at(self, index: int) -> PlaybackUnit:
        return self._registry.unit_for(self._videos[index])

    def start(self) -> None:
        """Ouverture du fil : la première vidéo devient active."""
        if not self._videos or self.active_index is not None:
            return
        self._switch_to(0)

    def stop(self) -> None:
        """Fermeture du fil : la vidéo active est mise en pause."""
        if self.active_index is None:
            return
        self.unit_at(self.active_index).deactivate()
        self.active_index = None

    def on_scroll(self, offset: float, viewport_height: float) -> bool:
        """
        Traite un événement de défilement.

        Returns:
            True si la vidéo active a changé
        """
        if not self._videos:
            return False
        if viewport_height <= 0:
            logger.debug(f"Defilement ignore, hauteur d'ecran {viewport_height}")
            return False

        index = compute_active_index(offset, viewport_height, len(self._videos))
        if index == self.active_index:
            return False

        self._switch_to(index)
        return True

    def _switch_to(self, index: int) -> None:
        previous = self.active_index
        if previous is not None:
            self.unit_at(previous).deactivate()
            self.active_index = None

        unit = self.unit_at(index)
        autoplay = unit.activate()
        try:
            self._spawn(autoplay)
        except Exception:
            # Planification impossible : aucune vidéo ne reste active
            autoplay.close()
            unit.deactivate()
            logger.error(f"Autoplay non planifie pour {unit.video.id}")
            raise

        self.active_index = index
        logger.debug(f"Video active: {previous} -> {index} ({self._videos[index].id})")


class FeedService:
    """
    Chargement du fil public.

    Le fil est lu une seule fois à l'ouverture : vidéos approuvées,
    plus récentes d'abord.
    """

    def __init__(self, video_repo: IVideoRepository) -> None:
        self._video_repo = video_repo

    def load_feed(self) -> list[Video]:
        """
        Charge les vidéos du fil public.

        Raises:
            FetchError: Si le store est indisponible
        """
        try:
            videos = self._video_repo.query(VideoStatus.APPROVED, newest_first=True)
        except FetchError as e:
            logger.error(f"Erreur lors du chargement du fil: {e}")
            raise
        return [video for video in videos if is_publicly_visible(video.status)]

    def open_session(
        self, element_factory: ElementFactory, spawn: Optional[Spawner] = None
    ) -> FeedActivationEngine:
        """Charge le fil et crée le moteur d'activation associé (non démarré)."""
        videos = self.load_feed()
        return FeedActivationEngine(videos, PlaybackRegistry(element_factory), spawn)
