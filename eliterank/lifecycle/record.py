"""Canonical competition record the lifecycle engine operates on.

Stored rows and API payloads spell fields several ways (snake_case,
camelCase and a few legacy names).  Translation happens here, once, at
the persistence boundary; the engine only ever sees ``CompetitionRecord``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping

from .clock import ensure_utc
from .exceptions import MalformedRecordError
from .status import CompetitionStatus, parse_status

# canonical name -> accepted spellings, first match wins
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "name": ("name", "title"),
    "status": ("status",),
    "nomination_start": ("nomination_start", "nominationStart"),
    "nomination_end": ("nomination_end", "nominationEnd"),
    "voting_start": ("voting_start", "votingStart"),
    "voting_end": ("voting_end", "votingEnd"),
    "finals_date": ("finals_date", "finalsDate", "finale_date", "finaleDate"),
    "city_id": ("city_id", "cityId", "city"),
    "category_id": ("category_id", "categoryId"),
    "demographic_id": ("demographic_id", "demographicId"),
    "host_id": ("host_id", "hostId"),
    "min_contestants": ("min_contestants", "minContestants"),
    "max_contestants": ("max_contestants", "maxContestants"),
    "updated_at": ("updated_at", "updatedAt"),
}

TIMESTAMP_FIELDS = (
    "nomination_start",
    "nomination_end",
    "voting_start",
    "voting_end",
    "finals_date",
    "updated_at",
)

REFERENCE_FIELDS = ("city_id", "category_id", "demographic_id", "host_id")


def parse_timestamp(value: Any) -> datetime | None:
    """Coerce a stored timestamp into an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return ensure_utc(datetime(value.year, value.month, value.day))
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise MalformedRecordError(f"Invalid timestamp: {value!r}") from exc
        return ensure_utc(parsed)
    raise MalformedRecordError(f"Unsupported timestamp type: {type(value).__name__}")


def _reference(value: Any) -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, Mapping):
        # Embedded relation, e.g. {"id": "...", "name": "Miami"}
        value = value.get("id")
        if value is None:
            return None
    return str(value)


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise MalformedRecordError(f"Invalid integer: {value!r}") from exc


@dataclass(frozen=True)
class CompetitionRecord:
    """A competition as the lifecycle engine sees it."""

    id: Any
    status: CompetitionStatus = CompetitionStatus.DRAFT
    name: str | None = None
    nomination_start: datetime | None = None
    nomination_end: datetime | None = None
    voting_start: datetime | None = None
    voting_end: datetime | None = None
    finals_date: datetime | None = None
    city_id: str | None = None
    category_id: str | None = None
    demographic_id: str | None = None
    host_id: str | None = None
    min_contestants: int | None = None
    max_contestants: int | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CompetitionRecord":
        """Build a record from a dict in any of the known spellings."""
        values: dict[str, Any] = {}
        for canonical, spellings in _FIELD_ALIASES.items():
            for key in spellings:
                if key in data and data[key] is not None:
                    values[canonical] = data[key]
                    break

        if "id" not in values:
            raise MalformedRecordError("Competition record has no id")

        raw_status = values.get("status", CompetitionStatus.DRAFT)
        try:
            status = parse_status(raw_status)
        except ValueError as exc:
            raise MalformedRecordError(f"Unknown competition status: {raw_status!r}") from exc

        return cls(
            id=values["id"],
            status=status,
            name=values.get("name"),
            **{field: parse_timestamp(values.get(field)) for field in TIMESTAMP_FIELDS},
            **{field: _reference(values.get(field)) for field in REFERENCE_FIELDS},
            min_contestants=_optional_int(values.get("min_contestants")),
            max_contestants=_optional_int(values.get("max_contestants")),
        )

    @classmethod
    def from_row(cls, row: Any) -> "CompetitionRecord":
        """Build a record from an ORM row (attribute access)."""
        data = {
            canonical: getattr(row, canonical, None)
            for canonical in _FIELD_ALIASES
        }
        return cls.from_mapping(data)

    def with_status(self, status: CompetitionStatus, updated_at: datetime) -> "CompetitionRecord":
        return dataclasses.replace(self, status=status, updated_at=updated_at)

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        data["status"] = self.status.value
        return data


__all__ = ["CompetitionRecord", "parse_timestamp"]
