"""Which competition fields an admin may edit in each lifecycle state.

Values:
    True    fully editable
    False   locked
    "warn"  editable after the operator confirms a warning
"""

from __future__ import annotations

from typing import Literal, Union

from eliterank.logging_config import get_logger

from .status import CompetitionStatus

logger = get_logger(__name__)

Editability = Union[bool, Literal["warn"]]

# Rule columns.  Nomination, voting and judging share the "live" column;
# archive shares the "completed" column.
_DRAFT, _PUBLISH, _LIVE, _COMPLETED = "draft", "publish", "live", "completed"

_COLUMN_FOR_STATUS: dict[CompetitionStatus, str] = {
    CompetitionStatus.DRAFT: _DRAFT,
    CompetitionStatus.PUBLISHED: _PUBLISH,
    CompetitionStatus.NOMINATION: _LIVE,
    CompetitionStatus.VOTING: _LIVE,
    CompetitionStatus.JUDGING: _LIVE,
    CompetitionStatus.COMPLETED: _COMPLETED,
    CompetitionStatus.ARCHIVED: _COMPLETED,
}


def _rule(draft: Editability, publish: Editability, live: Editability, completed: Editability) -> dict[str, Editability]:
    return {_DRAFT: draft, _PUBLISH: publish, _LIVE: live, _COMPLETED: completed}


FIELD_RULES: dict[str, dict[str, Editability]] = {
    # Identity, locked once live
    "name": _rule(True, True, False, False),
    "city": _rule(True, True, False, False),
    "season": _rule(True, True, False, False),
    "slug": _rule(True, True, False, False),
    # About / marketing
    "about_tagline": _rule(True, True, True, False),
    "about_description": _rule(True, True, True, False),
    "about_traits": _rule(True, True, "warn", False),
    "about_age_range": _rule(True, True, False, False),
    "about_requirement": _rule(True, True, False, False),
    # Prize structure
    "prize_pool_minimum": _rule(True, True, False, False),
    # Theme
    "theme_primary": _rule(True, True, "warn", False),
    "theme_voting": _rule(True, True, "warn", False),
    "theme_resurrection": _rule(True, True, "warn", False),
    # Timeline
    "nomination_start": _rule(True, True, False, False),
    "nomination_end": _rule(True, True, False, False),
    "voting_start": _rule(True, True, False, False),
    "voting_end": _rule(True, True, "warn", False),
    "finals_date": _rule(True, True, "warn", False),
    # Content
    "events": _rule(True, True, True, False),
    "rules": _rule(True, True, "warn", False),
    "sponsors": _rule(True, True, True, False),
    # Structure
    "number_of_winners": _rule(True, True, False, False),
    "selection_criteria": _rule(True, True, False, False),
    "advancement_thresholds": _rule(True, True, False, False),
    # Always open
    "announcements": _rule(True, True, True, True),
    "host_profile": _rule(True, True, True, True),
    # Only after the fact
    "winners": _rule(False, False, False, True),
}


def is_field_editable(field_name: str, status: CompetitionStatus) -> Editability:
    """Editability of *field_name* while a competition is in *status*."""
    column = _COLUMN_FOR_STATUS[status]
    rules = FIELD_RULES.get(field_name)
    if rules is None:
        logger.warning("no_editability_rule", field=field_name)
        return column in (_DRAFT, _PUBLISH)
    return rules[column]


def editable_fields(status: CompetitionStatus) -> dict[str, Editability]:
    column = _COLUMN_FOR_STATUS[status]
    return {name: rules[column] for name, rules in FIELD_RULES.items()}


def locked_fields(status: CompetitionStatus) -> list[str]:
    return [name for name, value in editable_fields(status).items() if value is False]


def warn_fields(status: CompetitionStatus) -> list[str]:
    return [name for name, value in editable_fields(status).items() if value == "warn"]


def fields_requiring_warning(fields: list[str], status: CompetitionStatus) -> list[str]:
    """Subset of *fields* the operator must be warned about before saving."""
    warned = set(warn_fields(status))
    return [name for name in fields if name in warned]


_LOCKED_REASONS: dict[str, dict[str, str]] = {
    _LIVE: {
        "name": "Competition name cannot be changed while live to avoid confusion.",
        "city": "Location cannot be changed while the competition is active.",
        "prize_pool_minimum": (
            "Prize pool minimum is locked once voting begins to protect contestant expectations."
        ),
        "about_age_range": "Eligibility requirements cannot change during an active competition.",
        "about_requirement": "Eligibility requirements cannot change during an active competition.",
        "nomination_start": "Past dates cannot be modified.",
        "nomination_end": "Nomination period cannot be changed once voting has started.",
        "voting_start": "Voting has already begun.",
        "number_of_winners": "Winner count cannot change during active competition.",
        "advancement_thresholds": "Advancement rules are locked once voting begins.",
    },
    _COMPLETED: {
        "default": "This field cannot be modified after the competition has ended.",
    },
}

DEFAULT_LOCKED_REASON = "This field is locked for the current competition status."

_EDIT_WARNINGS: dict[str, str] = {
    "about_traits": (
        'Changing "Who Competes" criteria during a live competition may confuse '
        "current contestants and voters."
    ),
    "theme_primary": "Changing theme colors will immediately affect how the public page appears.",
    "theme_voting": "Changing theme colors will immediately affect how the public page appears.",
    "theme_resurrection": (
        "Changing theme colors will immediately affect how the public page appears."
    ),
    "voting_end": (
        "Extending or shortening the voting period affects all contestants equally. "
        "Consider announcing this change."
    ),
    "finals_date": (
        "Changing the finals date may affect contestant and voter plans. "
        "Consider announcing this change."
    ),
    "rules": (
        "Modifying rules during an active competition should be done carefully "
        "and communicated to participants."
    ),
}

DEFAULT_EDIT_WARNING = "This competition is live. Are you sure you want to make this change?"


def locked_reason(field_name: str, status: CompetitionStatus) -> str:
    """Why *field_name* cannot be edited while a competition is in *status*."""
    reasons = _LOCKED_REASONS.get(_COLUMN_FOR_STATUS[status], {})
    return reasons.get(field_name) or reasons.get("default") or DEFAULT_LOCKED_REASON


def edit_warning(field_name: str) -> str:
    """Text to show before saving a ``"warn"`` field."""
    return _EDIT_WARNINGS.get(field_name, DEFAULT_EDIT_WARNING)


__all__ = [
    "DEFAULT_EDIT_WARNING",
    "DEFAULT_LOCKED_REASON",
    "FIELD_RULES",
    "edit_warning",
    "editable_fields",
    "fields_requiring_warning",
    "is_field_editable",
    "locked_fields",
    "locked_reason",
    "warn_fields",
]
