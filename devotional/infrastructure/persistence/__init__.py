"""
Module de persistance SQLite pour Devotional.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy) :

- database.py : Engine SQLite, session factory, initialisation
- models.py : Modeles SQLModel representant les tables
- repositories/ : Implementations des ports repository

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.
"""

from devotional.infrastructure.persistence.database import (
    get_engine,
    get_session,
    init_db,
)
from devotional.infrastructure.persistence.models import VideoModel

__all__ = [
    "get_engine",
    "get_session",
    "init_db",
    "VideoModel",
]
