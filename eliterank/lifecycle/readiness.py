"""Publish readiness: fields that must be set before a competition goes public."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .record import CompetitionRecord

# Missing any of these blocks publishing.
HARD_REQUIREMENTS: dict[str, Callable[[CompetitionRecord], bool]] = {
    "city": lambda c: bool(c.city_id),
    "category": lambda c: bool(c.category_id),
    "demographic": lambda c: bool(c.demographic_id),
    "host": lambda c: bool(c.host_id),
}

# Missing any of these only stops the automatic transitions.
ADVISORY_REQUIREMENTS: dict[str, Callable[[CompetitionRecord], bool]] = {
    "nomination_start": lambda c: c.nomination_start is not None,
    "finals_date": lambda c: c.finals_date is not None,
}

HARD_REQUIREMENT_ERRORS: dict[str, str] = {
    "city": "City must be assigned",
    "category": "Category must be assigned",
    "demographic": "Demographic must be assigned",
    "host": "Host must be assigned",
}

ADVISORY_REQUIREMENT_WARNINGS: dict[str, str] = {
    "nomination_start": "Nomination start date not set",
    "finals_date": "Finals date not set",
}


@dataclass(frozen=True)
class RequirementReport:
    city: bool
    category: bool
    demographic: bool
    host: bool
    nomination_start: bool
    finals_date: bool

    def as_dict(self) -> dict[str, bool]:
        return {
            "city": self.city,
            "category": self.category,
            "demographic": self.demographic,
            "host": self.host,
            "nomination_start": self.nomination_start,
            "finals_date": self.finals_date,
        }

    def missing_hard(self) -> list[str]:
        met = self.as_dict()
        return [name for name in HARD_REQUIREMENTS if not met[name]]

    def missing_advisory(self) -> list[str]:
        met = self.as_dict()
        return [name for name in ADVISORY_REQUIREMENTS if not met[name]]

    @property
    def ready(self) -> bool:
        """True when nothing blocks publishing."""
        return not self.missing_hard()

    def errors(self) -> list[str]:
        return [HARD_REQUIREMENT_ERRORS[name] for name in self.missing_hard()]

    def warnings(self) -> list[str]:
        return [ADVISORY_REQUIREMENT_WARNINGS[name] for name in self.missing_advisory()]


def check_publish_requirements(record: CompetitionRecord | None) -> RequirementReport:
    """Report which publish requirements *record* meets."""
    if record is None:
        return RequirementReport(
            city=False,
            category=False,
            demographic=False,
            host=False,
            nomination_start=False,
            finals_date=False,
        )

    checks = {**HARD_REQUIREMENTS, **ADVISORY_REQUIREMENTS}
    return RequirementReport(**{name: check(record) for name, check in checks.items()})


__all__ = [
    "ADVISORY_REQUIREMENTS",
    "HARD_REQUIREMENTS",
    "RequirementReport",
    "check_publish_requirements",
]
