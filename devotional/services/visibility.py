"""
Machine d'états de visibilité des vidéos.

Logique pure, sans accès au store. Les seules transitions légales sont
initiées par un modérateur depuis PENDING :

    pending --approve--> approved
    pending --ban------> banned

APPROVED et BANNED sont terminaux. Aucune transition ne ramène vers PENDING :
seule la création d'une vidéo produit ce statut.

Les prédicats is_publicly_visible et is_queued définissent les deux vues
consommatrices : le fil public et la file de modération.
"""

from devotional.core.entities.video import ModerationDecision, Video, VideoStatus


# Table des transitions : (statut courant, décision) -> nouveau statut
TRANSITIONS: dict[tuple[VideoStatus, ModerationDecision], VideoStatus] = {
    (VideoStatus.PENDING, ModerationDecision.APPROVE): VideoStatus.APPROVED,
    (VideoStatus.PENDING, ModerationDecision.BAN): VideoStatus.BANNED,
}


class IllegalTransitionError(Exception):
    """
    Transition de statut refusée par la machine d'états.

    Attributes:
        current: Statut courant de la vidéo
        decision: Décision tentée
    """

    def __init__(self, current: VideoStatus, decision: ModerationDecision) -> None:
        self.current = current
        self.decision = decision
        super().__init__(
            f"Transition interdite: {decision.value} depuis {current.value}"
        )


def is_publicly_visible(status: VideoStatus) -> bool:
    """Une vidéo apparaît dans le fil public si et seulement si elle est approuvée."""
    return status == VideoStatus.APPROVED


def is_queued(status: VideoStatus) -> bool:
    """Une vidéo apparaît dans la file de modération si et seulement si elle est en attente."""
    return status == VideoStatus.PENDING


def can_transition(current: VideoStatus, decision: ModerationDecision) -> bool:
    """Indique si la décision est applicable depuis le statut courant."""
    return (current, decision) in TRANSITIONS


def next_status(current: VideoStatus, decision: ModerationDecision) -> VideoStatus:
    """
    Calcule le statut résultant d'une décision.

    Args:
        current: Statut courant
        decision: Décision du modérateur

    Returns:
        Le nouveau statut

    Raises:
        IllegalTransitionError: Si la vidéo n'est pas en attente
    """
    try:
        return TRANSITIONS[(current, decision)]
    except KeyError:
        raise IllegalTransitionError(current, decision) from None


def apply_decision(video: Video, decision: ModerationDecision) -> Video:
    """
    Applique une décision sur l'entité.

    Le statut n'est modifié que si la transition est légale ; sinon
    IllegalTransitionError est levée et l'entité reste inchangée.
    """
    video.status = next_status(video.status, decision)
    return video
