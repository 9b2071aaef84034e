"""
Implementation SQLModel du repository Video.

Repository concret du store de contenu : filtre par statut, tri par date,
mise a jour du statut (conditionnelle ou non) et insertion.

Les erreurs SQLAlchemy sont converties en FetchError (lecture) ou
UpdateError (ecriture) pour que les services n'aient jamais a connaitre
la couche de persistance.
"""

from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from devotional.core.entities.video import Video, VideoDraft, VideoStatus
from devotional.core.ports.repositories import (
    FetchError,
    IVideoRepository,
    StaleStatusError,
    UpdateError,
    VideoNotFoundError,
)
from devotional.infrastructure.persistence.models import VideoModel


class SQLModelVideoRepository(IVideoRepository):
    """
    Repository SQLModel pour les videos.

    Gere la persistance des Video avec conversion bidirectionnelle
    entre entite et modele.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: VideoModel) -> Video:
        """Convertit un modele DB en entite domaine."""
        return Video(
            id=model.id,
            owner=model.owner,
            media_reference=model.media_url,
            title=model.title,
            description=model.description,
            status=VideoStatus(model.status),
            created_at=model.created_at,
            likes_count=model.likes_count,
        )

    def query(self, status: VideoStatus, newest_first: bool = True) -> list[Video]:
        """Liste les videos d'un statut, triees par date de creation."""
        order = VideoModel.created_at.desc() if newest_first else VideoModel.created_at.asc()
        statement = select(VideoModel).where(VideoModel.status == status.value).order_by(order)
        try:
            models = self._session.exec(statement).all()
        except SQLAlchemyError as e:
            raise FetchError(f"Lecture des videos {status.value} impossible: {e}") from e
        return [self._to_entity(model) for model in models]

    def get_by_id(self, video_id: str) -> Optional[Video]:
        """Recupere une video par son ID."""
        try:
            model = self._session.get(VideoModel, video_id, populate_existing=True)
        except SQLAlchemyError as e:
            raise FetchError(f"Lecture de la video {video_id} impossible: {e}") from e
        if model:
            return self._to_entity(model)
        return None

    def update_status(
        self,
        video_id: str,
        status: VideoStatus,
        expected_status: Optional[VideoStatus] = None,
    ) -> None:
        """
        Ecrit le statut d'une video en une seule requete UPDATE.

        Avec expected_status, la clause WHERE porte aussi sur le statut courant :
        si aucune ligne n'est modifiee, on distingue ID inconnu et statut perime.
        """
        table = VideoModel.__table__
        statement = update(table).where(table.c.id == video_id)
        if expected_status is not None:
            statement = statement.where(table.c.status == expected_status.value)
        statement = statement.values(status=status.value)

        try:
            result = self._session.connection().execute(statement)
            if result.rowcount == 0:
                self._session.rollback()
                current = self._session.get(VideoModel, video_id, populate_existing=True)
                if current is None:
                    raise VideoNotFoundError(video_id)
                raise StaleStatusError(video_id, expected_status, VideoStatus(current.status))
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise UpdateError(f"Mise a jour du statut de {video_id} impossible: {e}") from e

    def insert(self, draft: VideoDraft) -> Video:
        """Insere une video. Le statut initial est toujours PENDING."""
        model = VideoModel(
            owner=draft.owner,
            media_url=draft.media_reference,
            title=draft.title,
            description=draft.description,
            status=VideoStatus.PENDING.value,
        )
        try:
            self._session.add(model)
            self._session.commit()
            self._session.refresh(model)
        except SQLAlchemyError as e:
            self._session.rollback()
            raise UpdateError(f"Insertion de la video impossible: {e}") from e
        return self._to_entity(model)
