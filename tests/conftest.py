"""
Fixtures pytest partagees pour les tests Devotional.

Ce module contient les fixtures communes utilisees dans les tests:
- Mock du store de contenu (IVideoRepository)
- Fabrique de videos
- Settings de test avec chemins temporaires
- Session SQLModel sur une base SQLite temporaire
- Planificateur d'autoplay qui collecte les coroutines au lieu de les lancer
"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Iterator
from unittest.mock import MagicMock

import pytest
from sqlmodel import Session, SQLModel, create_engine

from devotional.config import Settings
from devotional.core.entities.video import Video, VideoStatus
from devotional.core.ports.repositories import IVideoRepository
from devotional.infrastructure.persistence import models  # noqa: F401


@pytest.fixture
def make_video() -> Callable[..., Video]:
    """
    Fabrique de Video.

    Les dates de creation decroissent avec le numero : video 0 est la plus recente.
    """
    base = datetime(2026, 3, 1, 12, 0, 0)

    def _make(
        index: int = 0,
        status: VideoStatus = VideoStatus.APPROVED,
        **overrides,
    ) -> Video:
        values = {
            "id": f"v{index}",
            "owner": "user-1",
            "media_reference": f"https://cdn.example.org/videos/user-1/v{index}.mp4",
            "title": f"Aarti {index}",
            "description": "Aarti du soir au ghat",
            "status": status,
            "created_at": base - timedelta(minutes=index),
            "likes_count": 10,
        }
        values.update(overrides)
        return Video(**values)

    return _make


@pytest.fixture
def mock_video_repo() -> MagicMock:
    """
    Mock de IVideoRepository pour les tests.

    query retourne une liste vide par defaut ; configurer dans chaque test.
    """
    repo = MagicMock(spec=IVideoRepository)
    repo.query.return_value = []
    repo.get_by_id.return_value = None
    repo.update_status.return_value = None
    return repo


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec chemins temporaires."""
    return Settings(
        database_url=f"sqlite:///{tmp_path}/test.db",
        media_dir=tmp_path / "media",
        media_base_url="https://cdn.example.org/videos",
        download_dir=tmp_path / "downloads",
        max_upload_size_mb=1,
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def db_session(tmp_path: Path) -> Iterator[Session]:
    """Session SQLModel sur une base SQLite propre a chaque test."""
    engine = create_engine(f"sqlite:///{tmp_path}/store.db")
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture
def spawned() -> Iterator[list]:
    """
    Planificateur d'autoplay pour le moteur : collecte les coroutines.

    Le test decide quand (et dans quel ordre) les attendre.
    Les coroutines jamais attendues sont fermees a la fin du test.
    """
    coroutines: list = []
    yield coroutines
    for coro in coroutines:
        coro.close()
