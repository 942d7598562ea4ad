"""Competition status transition rules.

States: draft → publish → nomination → voting → judging → completed
Any state can also → archive; archive can only → draft.

Backward moves inside the sequence are allowed but flagged.  Hard rule
violations come back as errors; nothing here raises for an ordinary
"requirement not met" except ``ensure_valid_transition``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .exceptions import ValidationError
from .readiness import check_publish_requirements
from .record import CompetitionRecord
from .status import (
    ACTIVE_STATUSES,
    CompetitionStatus,
    parse_status,
    sequence_index,
)

ARCHIVE_LOCK_ERROR = "Archived competitions can only be moved back to Draft"
REOPEN_COMPLETED_WARNING = "Reopening a completed competition may affect historical data"

# Targets that always need an operator to confirm.
CONFIRM_TARGETS: frozenset[CompetitionStatus] = frozenset({
    CompetitionStatus.ARCHIVED,
    CompetitionStatus.COMPLETED,
})


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _needs_publish_check(current: CompetitionStatus, new: CompetitionStatus) -> bool:
    if new is CompetitionStatus.PUBLISHED:
        return True
    # Leaving draft straight into a later public state skips publish;
    # the same fields are required.
    return (
        current is CompetitionStatus.DRAFT
        and new is not CompetitionStatus.ARCHIVED
        and sequence_index(new) > sequence_index(CompetitionStatus.PUBLISHED)
    )


def validate_transition(
    record: CompetitionRecord,
    new_status: CompetitionStatus | str,
) -> ValidationResult:
    """Check whether *record* may be moved to *new_status*."""
    new = parse_status(new_status)
    current = record.status
    errors: list[str] = []
    warnings: list[str] = []

    if new is current:
        return ValidationResult(valid=True)

    if _needs_publish_check(current, new):
        report = check_publish_requirements(record)
        errors.extend(report.errors())
        warnings.extend(report.warnings())

    if current is CompetitionStatus.COMPLETED and new is not CompetitionStatus.ARCHIVED:
        warnings.append(REOPEN_COMPLETED_WARNING)

    if current is CompetitionStatus.ARCHIVED and new is not CompetitionStatus.DRAFT:
        errors.append(ARCHIVE_LOCK_ERROR)

    current_index = sequence_index(current)
    new_index = sequence_index(new)
    if (
        new is not CompetitionStatus.ARCHIVED
        and current_index >= 0
        and new_index < current_index
    ):
        warnings.append(
            f"Moving from {current.value} back to {new.value} - "
            "this is an unusual backward move"
        )

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def ensure_valid_transition(
    record: CompetitionRecord,
    new_status: CompetitionStatus | str,
) -> ValidationResult:
    """Like validate_transition, raising ValidationError on any error."""
    result = validate_transition(record, new_status)
    if not result.valid:
        raise ValidationError(result.errors, result.warnings)
    return result


def requires_confirmation(
    current_status: CompetitionStatus | str,
    new_status: CompetitionStatus | str,
) -> bool:
    """Return True if an operator must confirm this change before it runs.

    Archiving, completing, and any change away from a live public state
    (nomination, voting, judging) need confirmation.  A no-op never does.
    """
    current = parse_status(current_status)
    new = parse_status(new_status)
    if new is current:
        return False
    if new in CONFIRM_TARGETS:
        return True
    return current in ACTIVE_STATUSES


def is_automatic_transition(
    current_status: CompetitionStatus | str,
    new_status: CompetitionStatus | str,
) -> bool:
    """Return True if the change is a date-driven forward step.

    These are applied by the reconciliation sweep without confirmation:
    publish → nomination/voting/judging and nomination/voting/judging →
    a later state up to completed.  Draft and archive are never left or
    entered automatically.
    """
    current = parse_status(current_status)
    new = parse_status(new_status)
    if current in (CompetitionStatus.DRAFT, CompetitionStatus.ARCHIVED):
        return False
    if new is CompetitionStatus.ARCHIVED:
        return False
    return sequence_index(new) > sequence_index(current)


__all__ = [
    "ARCHIVE_LOCK_ERROR",
    "REOPEN_COMPLETED_WARNING",
    "ValidationResult",
    "ensure_valid_transition",
    "is_automatic_transition",
    "requires_confirmation",
    "validate_transition",
]
