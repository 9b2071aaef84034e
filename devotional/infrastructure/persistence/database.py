"""
Connexion au store de contenu.

Une seule base SQLite (DEVOTIONAL_DATABASE_URL) contient la table videos,
lue par le fil et la file de modération. L'engine est créé au premier
besoin ; chaque repository reçoit sa propre session.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, create_engine

_engine: Optional[Engine] = None


def _ensure_sqlite_directory(database_url: str) -> None:
    """Le fichier SQLite est créé par le driver, pas son répertoire."""
    prefix = "sqlite:///"
    if database_url.startswith(prefix) and ":memory:" not in database_url:
        Path(database_url[len(prefix):]).parent.mkdir(parents=True, exist_ok=True)


def get_engine() -> Engine:
    """Engine du store, construit depuis Settings au premier appel."""
    global _engine
    if _engine is None:
        from devotional.config import Settings

        database_url = Settings().database_url
        connect_args = {}
        if database_url.startswith("sqlite"):
            _ensure_sqlite_directory(database_url)
            # La CLI async peut toucher la session hors du thread qui l'a ouverte
            connect_args["check_same_thread"] = False
        _engine = create_engine(database_url, connect_args=connect_args)
    return _engine


def get_session() -> Iterator[Session]:
    """Session du store ; le container la récupère avec next(get_session())."""
    with Session(get_engine()) as session:
        yield session


def init_db() -> None:
    """Crée la table videos et son index (status, created_at) si absents."""
    from devotional.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(get_engine())
