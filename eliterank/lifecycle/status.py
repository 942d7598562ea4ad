"""Competition lifecycle states.

States: draft → publish → nomination → voting → judging → completed
Any state can also → archive; archive can only → draft.

The string values are persisted as-is.  Do not rename or reorder them.
"""

from __future__ import annotations

from enum import Enum


class CompetitionStatus(str, Enum):
    """Persisted, authoritative lifecycle value of a competition."""

    DRAFT = "draft"
    PUBLISHED = "publish"
    NOMINATION = "nomination"
    VOTING = "voting"
    JUDGING = "judging"
    COMPLETED = "completed"
    ARCHIVED = "archive"


class Phase(str, Enum):
    """Display-only value computed from status and timeline dates."""

    DRAFT = "draft"
    PUBLISHED = "publish"
    NOMINATION = "nomination"
    VOTING = "voting"
    JUDGING = "judging"
    COMPLETED = "completed"
    ARCHIVED = "archive"


# Forward lifecycle order.  ARCHIVED sits outside of it.
STATUS_SEQUENCE: tuple[CompetitionStatus, ...] = (
    CompetitionStatus.DRAFT,
    CompetitionStatus.PUBLISHED,
    CompetitionStatus.NOMINATION,
    CompetitionStatus.VOTING,
    CompetitionStatus.JUDGING,
    CompetitionStatus.COMPLETED,
)

# Only an administrator moves a competition into or out of these.
MANUAL_STATUSES: frozenset[CompetitionStatus] = frozenset({
    CompetitionStatus.DRAFT,
    CompetitionStatus.ARCHIVED,
})

# Publicly visible states where voters and nominees are interacting.
ACTIVE_STATUSES: frozenset[CompetitionStatus] = frozenset({
    CompetitionStatus.NOMINATION,
    CompetitionStatus.VOTING,
    CompetitionStatus.JUDGING,
})

# The reconciliation sweep skips these.
SETTLED_STATUSES: frozenset[CompetitionStatus] = MANUAL_STATUSES | {
    CompetitionStatus.COMPLETED,
}

# Aliases written by older clients.
LEGACY_STATUS_ALIASES: dict[str, CompetitionStatus] = {
    "published": CompetitionStatus.PUBLISHED,
    "live": CompetitionStatus.NOMINATION,
    "active": CompetitionStatus.NOMINATION,
    "archived": CompetitionStatus.ARCHIVED,
}


def parse_status(value: str | CompetitionStatus) -> CompetitionStatus:
    """Return the canonical status for a wire value or legacy alias.

    Raises ValueError for anything unrecognised.
    """
    if isinstance(value, CompetitionStatus):
        return value
    try:
        return CompetitionStatus(value)
    except ValueError:
        alias = LEGACY_STATUS_ALIASES.get(value)
        if alias is None:
            raise
        return alias


def sequence_index(status: CompetitionStatus | Phase) -> int:
    """Position in the forward lifecycle order, or -1 for archive."""
    for index, candidate in enumerate(STATUS_SEQUENCE):
        if candidate.value == status.value:
            return index
    return -1


def phase_for(status: CompetitionStatus) -> Phase:
    """Display phase a status maps to when no dates apply."""
    return Phase(status.value)


def status_for(phase: Phase) -> CompetitionStatus:
    """Status a record is written to once its computed phase is applied."""
    return CompetitionStatus(phase.value)


def is_publicly_viewable(phase: Phase) -> bool:
    """Whether the public competition page opens in this phase."""
    return phase in {Phase.NOMINATION, Phase.VOTING, Phase.JUDGING, Phase.COMPLETED}


__all__ = [
    "ACTIVE_STATUSES",
    "CompetitionStatus",
    "LEGACY_STATUS_ALIASES",
    "MANUAL_STATUSES",
    "Phase",
    "SETTLED_STATUSES",
    "STATUS_SEQUENCE",
    "is_publicly_viewable",
    "parse_status",
    "phase_for",
    "sequence_index",
    "status_for",
]
