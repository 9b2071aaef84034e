"""
Tests du moteur d'activation du fil et du chargement du fil.

Ces tests verifient:
- Calcul de l'index actif (arrondi, bornes, fil vide)
- Une seule video active, signaux envoyes uniquement sur changement reel
- Au plus une video en lecture apres chaque defilement
- Resolutions d'autoplay perimees ignorees
- FeedService: videos approuvees uniquement, FetchError propage
"""

import asyncio

import pytest

from devotional.core.entities.video import VideoStatus
from devotional.core.ports.repositories import FetchError
from devotional.services.feed import FeedActivationEngine, FeedService, compute_active_index
from devotional.services.playback import PlaybackRegistry, PlaybackState
from tests.fixtures.media import ElementFactory

VIEWPORT = 800


@pytest.fixture
def elements() -> ElementFactory:
    return ElementFactory()


@pytest.fixture
def three_videos(make_video):
    return [make_video(i) for i in range(3)]


@pytest.fixture
def engine(three_videos, elements, spawned) -> FeedActivationEngine:
    return FeedActivationEngine(three_videos, PlaybackRegistry(elements), spawn=spawned.append)


async def _run_spawned(spawned: list) -> None:
    """Attend les tentatives d'autoplay en attente, dans l'ordre de lancement."""
    while spawned:
        await spawned.pop(0)


class TestComputeActiveIndex:
    """Tests du calcul d'index depuis la position de defilement."""

    def test_offset_exact(self):
        """Scenario: 1600px / 800px -> index 2."""
        assert compute_active_index(1600, VIEWPORT, 3) == 2

    def test_overscroll_borne_au_dernier(self):
        """Scenario: 2500px avec 3 videos -> index 2, pas 3."""
        assert compute_active_index(2500, VIEWPORT, 3) == 2

    def test_offset_negatif_borne_a_zero(self):
        assert compute_active_index(-300, VIEWPORT, 3) == 0

    def test_arrondi_au_demi_superieur(self):
        assert compute_active_index(399, VIEWPORT, 3) == 0
        assert compute_active_index(400, VIEWPORT, 3) == 1
        assert compute_active_index(1200, VIEWPORT, 3) == 2

    def test_fil_vide(self):
        assert compute_active_index(0, VIEWPORT, 0) is None

    def test_hauteur_invalide(self):
        with pytest.raises(ValueError):
            compute_active_index(100, 0, 3)


class TestFeedActivationEngine:
    """Tests du moteur d'activation."""

    def test_start_active_la_premiere_video(self, engine, spawned):
        engine.start()

        assert engine.active_index == 0
        assert engine.unit_at(0).state == PlaybackState.ACTIVATING
        assert len(spawned) == 1

    def test_start_idempotent(self, engine, spawned):
        engine.start()
        engine.start()
        assert len(spawned) == 1

    def test_scenario_defilement_vers_index_2(self, engine, spawned):
        """3 videos, 800px, offset 1600 -> unite 2 ACTIVATING, unites 0 et 1 INACTIVE."""
        engine.start()

        assert engine.on_scroll(1600, VIEWPORT) is True

        assert engine.active_index == 2
        assert engine.unit_at(2).state == PlaybackState.ACTIVATING
        assert engine.unit_at(0).state == PlaybackState.INACTIVE
        assert engine.unit_at(1).state == PlaybackState.INACTIVE

    def test_overscroll_garde_une_video_active(self, engine):
        engine.start()
        engine.on_scroll(2500, VIEWPORT)
        assert engine.active_index == 2
        assert engine.active_unit is engine.unit_at(2)

    def test_evenements_identiques_sans_nouveau_signal(self, engine, spawned, elements):
        """Recalculer depuis un offset inchange ne redeclenche aucun signal."""
        engine.start()
        engine.on_scroll(800, VIEWPORT)
        pauses_before = {vid: el.pause_calls for vid, el in elements.elements.items()}
        spawned_before = len(spawned)

        for _ in range(5):
            assert engine.on_scroll(800, VIEWPORT) is False
        # Un petit deplacement qui arrondit au meme index non plus
        assert engine.on_scroll(850, VIEWPORT) is False

        assert len(spawned) == spawned_before
        assert {vid: el.pause_calls for vid, el in elements.elements.items()} == pauses_before

    def test_ancienne_unite_desactivee_avant_activation(self, engine, spawned):
        """La pause de l'ancienne unite precede l'activation de la nouvelle."""
        engine.start()
        calls = []
        old_unit = engine.unit_at(0)
        new_unit = engine.unit_at(1)
        original_deactivate = old_unit.deactivate
        original_activate = new_unit.activate

        def tracked_deactivate():
            calls.append("deactivate")
            original_deactivate()

        def tracked_activate():
            calls.append("activate")
            return original_activate()

        old_unit.deactivate = tracked_deactivate
        new_unit.activate = tracked_activate

        engine.on_scroll(800, VIEWPORT)

        assert calls == ["deactivate", "activate"]

    @pytest.mark.asyncio
    async def test_au_plus_une_video_en_lecture(self, engine, spawned):
        """Apres chaque defilement et resolution, au plus une unite est PLAYING."""
        engine.start()
        await _run_spawned(spawned)

        offsets = [0, 300, 790, 1600, 2500, 1100, -50, 400, 399, 1599, 1601, 0, 2400]
        for offset in offsets:
            engine.on_scroll(offset, VIEWPORT)
            await _run_spawned(spawned)
            playing = engine.registry.playing()
            assert len(playing) <= 1
            assert playing == [engine.active_unit]

    @pytest.mark.asyncio
    async def test_defilement_rapide_autoplay_perime_ignore(self, engine, spawned, elements):
        """Deux changements avant toute resolution : seule la derniere unite joue."""
        engine.start()
        engine.on_scroll(800, VIEWPORT)
        engine.on_scroll(1600, VIEWPORT)

        # Resolution dans le desordre : la plus recente d'abord
        for coro in reversed(spawned):
            await coro
        spawned.clear()

        assert engine.unit_at(2).state == PlaybackState.PLAYING
        assert engine.unit_at(0).state == PlaybackState.INACTIVE
        assert engine.unit_at(1).state == PlaybackState.INACTIVE
        assert [e.playing for e in elements.elements.values()] == [False, False, True]

    def test_fil_vide_aucune_operation(self, elements, spawned):
        engine = FeedActivationEngine([], PlaybackRegistry(elements), spawn=spawned.append)

        engine.start()
        assert engine.on_scroll(1600, VIEWPORT) is False

        assert engine.active_index is None
        assert engine.active_unit is None
        assert spawned == []
        assert elements.elements == {}

    def test_sans_boucle_asyncio_aucune_video_active(self, three_videos, elements):
        """Hors boucle, le planificateur par defaut echoue sans laisser d'etat partiel."""
        engine = FeedActivationEngine(three_videos, PlaybackRegistry(elements))

        with pytest.raises(RuntimeError):
            engine.start()

        assert engine.active_index is None
        assert engine.active_unit is None
        assert engine.unit_at(0).state == PlaybackState.INACTIVE
        assert engine.unit_at(0).intended_active is False

    def test_echec_de_planification_au_defilement(self, engine, spawned):
        engine.start()

        def _failing_spawn(coro):
            raise RuntimeError("no running event loop")

        engine._spawn = _failing_spawn
        with pytest.raises(RuntimeError):
            engine.on_scroll(1600, VIEWPORT)

        assert engine.active_index is None
        assert engine.registry.playing() == []
        assert all(unit.state == PlaybackState.INACTIVE for unit in engine.registry)

    def test_hauteur_nulle_ignoree(self, engine, spawned):
        engine.start()
        assert engine.on_scroll(1600, 0) is False
        assert engine.active_index == 0

    def test_videos_non_approuvees_ecartees(self, make_video, elements, spawned):
        """Une video non approuvee n'entre jamais dans la sequence du moteur."""
        videos = [
            make_video(0),
            make_video(1, VideoStatus.PENDING),
            make_video(2, VideoStatus.BANNED),
            make_video(3),
        ]
        engine = FeedActivationEngine(videos, PlaybackRegistry(elements), spawn=spawned.append)

        assert [v.id for v in engine.videos] == ["v0", "v3"]
        assert all(v.status == VideoStatus.APPROVED for v in engine.videos)

    def test_stop_met_en_pause(self, engine, elements):
        engine.start()
        engine.stop()

        assert engine.active_index is None
        assert engine.registry.get("v0").state == PlaybackState.INACTIVE
        assert elements.elements["v0"].pause_calls == 1

    def test_etat_conserve_par_id(self, engine):
        """Le son coupe d'une video survit a un aller-retour de defilement."""
        engine.start()
        engine.unit_at(0).toggle_mute()

        engine.on_scroll(800, VIEWPORT)
        engine.on_scroll(0, VIEWPORT)

        assert engine.unit_at(0).muted is True
        assert len(engine.registry) == 2


class TestFeedService:
    """Tests du chargement du fil."""

    def test_load_feed_videos_approuvees_recentes_d_abord(self, mock_video_repo, make_video):
        mock_video_repo.query.return_value = [make_video(0), make_video(1)]
        service = FeedService(mock_video_repo)

        videos = service.load_feed()

        mock_video_repo.query.assert_called_once_with(VideoStatus.APPROVED, newest_first=True)
        assert [v.id for v in videos] == ["v0", "v1"]

    def test_load_feed_filtre_non_approuvees(self, mock_video_repo, make_video):
        mock_video_repo.query.return_value = [make_video(0), make_video(1, VideoStatus.BANNED)]
        assert [v.id for v in FeedService(mock_video_repo).load_feed()] == ["v0"]

    def test_load_feed_fetch_error(self, mock_video_repo):
        mock_video_repo.query.side_effect = FetchError("store down")
        with pytest.raises(FetchError):
            FeedService(mock_video_repo).load_feed()

    def test_open_session(self, mock_video_repo, make_video, elements, spawned):
        mock_video_repo.query.return_value = [make_video(0), make_video(1)]

        engine = FeedService(mock_video_repo).open_session(elements, spawn=spawned.append)

        assert [v.id for v in engine.videos] == ["v0", "v1"]
        assert engine.active_index is None

    @pytest.mark.asyncio
    async def test_open_session_planificateur_par_defaut(self, mock_video_repo, make_video, elements):
        """Sans planificateur fourni, l'autoplay est lance dans la boucle courante."""
        mock_video_repo.query.return_value = [make_video(0)]
        engine = FeedService(mock_video_repo).open_session(elements)

        engine.start()
        for _ in range(3):
            await asyncio.sleep(0)

        assert engine.unit_at(0).state == PlaybackState.PLAYING