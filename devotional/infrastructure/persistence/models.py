"""
Modeles SQLModel pour la base de donnees Devotional.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- videos: Videos soumises avec leur statut de moderation
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from sqlmodel import Field, Index, SQLModel


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class VideoModel(SQLModel, table=True):
    """
    Modele representant une video dans la base de donnees.

    Le statut est stocke sous sa valeur texte (pending, approved, banned).
    L'index (status, created_at) sert les deux vues : fil et moderation.
    """

    __tablename__ = "videos"
    __table_args__ = (
        Index("ix_videos_status_created_at", "status", "created_at"),
    )

    id: str = Field(default_factory=_new_id, primary_key=True)
    owner: str = Field(index=True)
    media_url: str
    title: str = ""
    description: str = ""
    status: str = Field(default="pending")
    created_at: datetime = Field(default_factory=_utcnow)
    likes_count: int = Field(default=0)
