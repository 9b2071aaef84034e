"""
Tests de la machine d'etats de visibilite.

Couvre:
- Transitions legales depuis PENDING
- Refus de toute transition depuis APPROVED et BANNED
- Predicats de visibilite (fil public, file de moderation)
"""

import pytest

from devotional.core.entities.video import ModerationDecision, VideoStatus
from devotional.services.visibility import (
    IllegalTransitionError,
    apply_decision,
    can_transition,
    is_publicly_visible,
    is_queued,
    next_status,
)


class TestNextStatus:
    """Tests de next_status."""

    def test_approve_depuis_pending(self):
        assert next_status(VideoStatus.PENDING, ModerationDecision.APPROVE) == VideoStatus.APPROVED

    def test_ban_depuis_pending(self):
        assert next_status(VideoStatus.PENDING, ModerationDecision.BAN) == VideoStatus.BANNED

    @pytest.mark.parametrize("current", [VideoStatus.APPROVED, VideoStatus.BANNED])
    @pytest.mark.parametrize("decision", list(ModerationDecision))
    def test_statuts_terminaux_refuses(self, current, decision):
        """Aucune transition n'existe depuis APPROVED ou BANNED."""
        with pytest.raises(IllegalTransitionError) as exc_info:
            next_status(current, decision)
        assert exc_info.value.current == current
        assert exc_info.value.decision == decision
        assert not can_transition(current, decision)


class TestApplyDecision:
    """Tests de apply_decision sur une entite."""

    def test_applique_transition_legale(self, make_video):
        video = make_video(status=VideoStatus.PENDING)
        result = apply_decision(video, ModerationDecision.APPROVE)
        assert result is video
        assert video.status == VideoStatus.APPROVED

    def test_transition_illegale_laisse_statut_inchange(self, make_video):
        """Bannir une video approuvee est refuse ; le statut ne bouge pas."""
        video = make_video(status=VideoStatus.APPROVED)
        with pytest.raises(IllegalTransitionError):
            apply_decision(video, ModerationDecision.BAN)
        assert video.status == VideoStatus.APPROVED

    def test_aucun_retour_vers_pending(self, make_video):
        """Une video bannie reste bannie, quelle que soit la decision."""
        video = make_video(status=VideoStatus.BANNED)
        for decision in ModerationDecision:
            with pytest.raises(IllegalTransitionError):
                apply_decision(video, decision)
        assert video.status == VideoStatus.BANNED


class TestPredicates:
    """Tests des predicats de visibilite."""

    def test_visible_dans_le_fil_uniquement_si_approuvee(self):
        assert is_publicly_visible(VideoStatus.APPROVED)
        assert not is_publicly_visible(VideoStatus.PENDING)
        assert not is_publicly_visible(VideoStatus.BANNED)

    def test_en_file_uniquement_si_pending(self):
        assert is_queued(VideoStatus.PENDING)
        assert not is_queued(VideoStatus.APPROVED)
        assert not is_queued(VideoStatus.BANNED)
