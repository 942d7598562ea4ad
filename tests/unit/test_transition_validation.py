"""Unit tests for competition status transition rules."""

from datetime import datetime, timezone

import pytest

from eliterank.lifecycle.exceptions import ValidationError
from eliterank.lifecycle.phase import compute_phase
from eliterank.lifecycle.record import CompetitionRecord
from eliterank.lifecycle.state_machine import (
    ARCHIVE_LOCK_ERROR,
    REOPEN_COMPLETED_WARNING,
    ensure_valid_transition,
    is_automatic_transition,
    requires_confirmation,
    validate_transition,
)
from eliterank.lifecycle.status import CompetitionStatus, Phase
from tests.factories import make_competition

S = CompetitionStatus


# ---------------------------------------------------------------------------
# Worked scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_published_record_opens_nominations(self):
        record = CompetitionRecord(
            id="c1",
            status=S.PUBLISHED,
            nomination_start=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )
        now = datetime(2025, 1, 2, tzinfo=timezone.utc)
        assert compute_phase(record, now) is Phase.NOMINATION

    def test_publish_without_city(self):
        record = CompetitionRecord(id="c2", status=S.DRAFT)
        result = validate_transition(record, S.PUBLISHED)
        assert result.valid is False
        assert "City must be assigned" in result.errors

    def test_archive_completed(self):
        record = make_competition(S.COMPLETED)
        result = validate_transition(record, S.ARCHIVED)
        assert result.valid is True
        assert result.warnings == []
        assert requires_confirmation(S.COMPLETED, S.ARCHIVED) is True

    def test_voting_back_to_draft(self):
        record = make_competition(S.VOTING)
        result = validate_transition(record, S.DRAFT)
        assert result.valid is True
        assert len(result.warnings) == 1
        assert "unusual backward move" in result.warnings[0]
        assert requires_confirmation(S.VOTING, S.DRAFT) is True

    def test_archived_cannot_jump_to_voting(self):
        record = make_competition(S.ARCHIVED)
        result = validate_transition(record, S.VOTING)
        assert result.valid is False
        assert result.errors == [ARCHIVE_LOCK_ERROR]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class TestValidateTransition:
    def test_publish_ready_record(self):
        result = validate_transition(make_competition(S.DRAFT), "publish")
        assert result.valid is True
        assert result.errors == []

    def test_publish_warns_about_missing_dates(self):
        record = make_competition(S.DRAFT, with_timeline=False)
        result = validate_transition(record, S.PUBLISHED)
        assert result.valid is True
        assert result.warnings == ["Nomination start date not set", "Finals date not set"]

    def test_skipping_publish_still_checks_requirements(self):
        record = make_competition(S.DRAFT, ready=False)
        result = validate_transition(record, S.NOMINATION)
        assert result.valid is False
        assert "Host must be assigned" in result.errors

    def test_draft_to_archive_skips_requirements(self):
        record = make_competition(S.DRAFT, ready=False)
        assert validate_transition(record, S.ARCHIVED).valid is True

    def test_reopen_completed_warns(self):
        result = validate_transition(make_competition(S.COMPLETED), S.JUDGING)
        assert result.valid is True
        assert REOPEN_COMPLETED_WARNING in result.warnings
        assert any("back to judging" in w for w in result.warnings)

    def test_backward_message_names_both_states(self):
        result = validate_transition(make_competition(S.JUDGING), S.NOMINATION)
        assert result.warnings == [
            "Moving from judging back to nomination - this is an unusual backward move"
        ]

    def test_forward_move_has_no_warnings(self):
        result = validate_transition(make_competition(S.NOMINATION), S.VOTING)
        assert result.valid is True
        assert result.warnings == []

    def test_archive_restore_to_draft(self):
        result = validate_transition(make_competition(S.ARCHIVED), S.DRAFT)
        assert result.valid is True
        assert result.errors == []

    def test_legacy_alias_target(self):
        result = validate_transition(make_competition(S.DRAFT), "published")
        assert result.valid is True

    def test_ensure_valid_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            ensure_valid_transition(make_competition(S.ARCHIVED), S.PUBLISHED)
        assert ARCHIVE_LOCK_ERROR in exc_info.value.errors

    def test_ensure_valid_returns_result(self):
        result = ensure_valid_transition(make_competition(S.PUBLISHED), S.NOMINATION)
        assert result.valid is True


# ---------------------------------------------------------------------------
# Properties over every status
# ---------------------------------------------------------------------------


class TestTransitionProperties:
    @pytest.mark.parametrize("target", [s for s in S if s not in (S.DRAFT, S.ARCHIVED)])
    def test_archive_lock(self, target):
        assert validate_transition(make_competition(S.ARCHIVED), target).valid is False

    @pytest.mark.parametrize("current", [s for s in S if s is not S.PUBLISHED])
    def test_publish_gate_without_host(self, current):
        record = make_competition(current, host_id=None)
        result = validate_transition(record, S.PUBLISHED)
        assert result.valid is False
        assert result.errors

    @pytest.mark.parametrize("status", list(S))
    def test_no_op_is_always_clean(self, status):
        record = make_competition(status, ready=False, with_timeline=False)
        result = validate_transition(record, status)
        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []
        assert requires_confirmation(status, status) is False


class TestRequiresConfirmation:
    @pytest.mark.parametrize("current", [S.DRAFT, S.PUBLISHED, S.NOMINATION, S.JUDGING])
    def test_archive_always_confirms(self, current):
        assert requires_confirmation(current, S.ARCHIVED) is True

    def test_completing_confirms(self):
        assert requires_confirmation(S.PUBLISHED, S.COMPLETED) is True

    @pytest.mark.parametrize("current", [S.NOMINATION, S.VOTING, S.JUDGING])
    def test_leaving_live_state_confirms(self, current):
        assert requires_confirmation(current, S.PUBLISHED) is True

    def test_publishing_does_not_confirm(self):
        assert requires_confirmation(S.DRAFT, S.PUBLISHED) is False

    def test_publish_to_nomination_does_not_confirm(self):
        assert requires_confirmation(S.PUBLISHED, S.NOMINATION) is False

    def test_restore_from_archive_does_not_confirm(self):
        assert requires_confirmation(S.ARCHIVED, S.DRAFT) is False

    def test_legacy_live_counts_as_active(self):
        assert requires_confirmation("live", "publish") is True


class TestAutomaticTransitions:
    def test_forward_date_driven_moves(self):
        assert is_automatic_transition(S.PUBLISHED, S.NOMINATION) is True
        assert is_automatic_transition(S.VOTING, S.JUDGING) is True
        assert is_automatic_transition(S.JUDGING, S.COMPLETED) is True

    def test_draft_never_leaves_automatically(self):
        assert is_automatic_transition(S.DRAFT, S.PUBLISHED) is False

    def test_archive_never_automatic(self):
        assert is_automatic_transition(S.COMPLETED, S.ARCHIVED) is False
        assert is_automatic_transition(S.ARCHIVED, S.DRAFT) is False

    def test_backward_is_manual(self):
        assert is_automatic_transition(S.VOTING, S.NOMINATION) is False

    def test_no_op_is_not_a_transition(self):
        assert is_automatic_transition(S.VOTING, S.VOTING) is False
