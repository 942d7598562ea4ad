"""Operator-facing hints about what happens next to a competition."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .clock import ensure_utc
from .record import CompetitionRecord
from .status import CompetitionStatus

_RESTRICTIONS: dict[CompetitionStatus, str] = {
    CompetitionStatus.DRAFT: (
        "Competition is in draft. Admin can publish when requirements are met."
    ),
    CompetitionStatus.PUBLISHED: (
        "Competition will open nominations automatically when the nomination period starts."
    ),
    CompetitionStatus.NOMINATION: (
        "Competition will open voting automatically when the voting period starts."
    ),
    CompetitionStatus.VOTING: (
        "Competition will move to judging automatically when voting ends."
    ),
    CompetitionStatus.JUDGING: (
        "Competition will complete automatically after the finals date."
    ),
    CompetitionStatus.COMPLETED: "Competition has ended. Admin can archive if needed.",
    CompetitionStatus.ARCHIVED: "Competition is archived. Admin can restore it to draft if needed.",
}


def status_change_restriction(status: CompetitionStatus) -> str:
    """One sentence explaining who controls the next change from *status*."""
    return _RESTRICTIONS.get(
        status, "Status is managed automatically based on timeline dates."
    )


@dataclass(frozen=True)
class AutoTransition:
    next_status: CompetitionStatus
    trigger_at: datetime
    description: str


# status -> ordered (boundary attribute, next status, description)
_AUTO_STEPS: dict[CompetitionStatus, list[tuple[str, CompetitionStatus, str]]] = {
    CompetitionStatus.PUBLISHED: [
        ("nomination_start", CompetitionStatus.NOMINATION, "Nominations open when the nomination period starts"),
    ],
    CompetitionStatus.NOMINATION: [
        ("voting_start", CompetitionStatus.VOTING, "Voting opens when the voting period starts"),
        ("voting_end", CompetitionStatus.JUDGING, "Judging starts when voting ends"),
        ("finals_date", CompetitionStatus.COMPLETED, "Completes after the finals date"),
    ],
    CompetitionStatus.VOTING: [
        ("voting_end", CompetitionStatus.JUDGING, "Judging starts when voting ends"),
        ("finals_date", CompetitionStatus.COMPLETED, "Completes after the finals date"),
    ],
    CompetitionStatus.JUDGING: [
        ("finals_date", CompetitionStatus.COMPLETED, "Completes after the finals date"),
    ],
}


def next_auto_transition(record: CompetitionRecord | None) -> AutoTransition | None:
    """Next date-driven status change for *record*, or None.

    Picks the first configured boundary for the current status; boundaries
    that are not set are skipped.
    """
    if record is None:
        return None
    for attribute, next_status, description in _AUTO_STEPS.get(record.status, []):
        boundary = getattr(record, attribute)
        if boundary is not None:
            return AutoTransition(
                next_status=next_status,
                trigger_at=ensure_utc(boundary),
                description=description,
            )
    return None


__all__ = ["AutoTransition", "next_auto_transition", "status_change_restriction"]
