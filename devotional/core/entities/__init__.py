"""
Entités métier représentant les concepts du domaine.

Exports:
- Video: Vidéo courte avec son statut de visibilité
- VideoDraft: Brouillon de vidéo avant insertion
- VideoStatus: Statuts pending / approved / banned
- ModerationDecision: Décisions approve / ban
"""

from devotional.core.entities.video import (
    ModerationDecision,
    Video,
    VideoDraft,
    VideoStatus,
)

__all__ = [
    "ModerationDecision",
    "Video",
    "VideoDraft",
    "VideoStatus",
]
