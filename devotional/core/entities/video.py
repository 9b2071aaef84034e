"""
Entités vidéo.

Entités représentant les vidéos courtes soumises par les utilisateurs,
avec leur statut de visibilité gouverné par la modération.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class VideoStatus(Enum):
    """Statut de visibilité d'une vidéo."""

    PENDING = "pending"
    APPROVED = "approved"
    BANNED = "banned"


class ModerationDecision(Enum):
    """Décision d'un modérateur sur une vidéo en attente."""

    APPROVE = "approve"
    BAN = "ban"


@dataclass
class Video:
    """
    Une vidéo courte publiée (ou en attente de publication).

    Le statut n'est modifié que par la machine d'états de visibilité
    (voir services/visibility.py). Le compteur de likes est celui du serveur :
    le "like" local d'une session n'est jamais persisté.

    Attributs :
        id : Identifiant unique opaque
        owner : Identifiant de l'utilisateur ayant soumis la vidéo
        media_reference : URL publique du fichier vidéo
        title : Titre (50 caractères max)
        description : Description (200 caractères max)
        status : Statut de visibilité (pending, approved, banned)
        created_at : Date de création, clé de tri du fil (plus récent d'abord)
        likes_count : Nombre de likes côté serveur
    """

    id: str
    owner: str
    media_reference: str
    title: str = ""
    description: str = ""
    status: VideoStatus = VideoStatus.PENDING
    created_at: Optional[datetime] = None
    likes_count: int = 0


@dataclass
class VideoDraft:
    """
    Brouillon de vidéo avant insertion dans le store.

    Le brouillon ne porte pas de statut : toute insertion produit
    une vidéo en statut PENDING.
    """

    owner: str
    media_reference: str
    title: str = ""
    description: str = ""
