"""Errors raised by the competition lifecycle engine."""

from __future__ import annotations

from datetime import datetime
from typing import Any


class LifecycleError(Exception):
    """Base class for lifecycle failures."""


class ValidationError(LifecycleError):
    """A proposed status change breaks a hard rule.  Nothing was written."""

    def __init__(self, errors: list[str], warnings: list[str] | None = None) -> None:
        self.errors = list(errors)
        self.warnings = list(warnings or [])
        super().__init__("; ".join(self.errors) or "Invalid status transition")


class ConfirmationRequiredError(LifecycleError):
    """The transition needs an explicit operator confirmation before execute."""

    def __init__(self, current_status: str, new_status: str) -> None:
        self.current_status = current_status
        self.new_status = new_status
        super().__init__(
            f"Changing status from '{current_status}' to '{new_status}' "
            "requires confirmation"
        )


class ConflictError(LifecycleError):
    """The record changed since the caller last read it.

    Re-read the record and validate again; the requested change may no
    longer apply.
    """

    def __init__(
        self,
        record_id: Any,
        expected_updated_at: datetime | None,
        actual_updated_at: datetime | None,
    ) -> None:
        self.record_id = record_id
        self.expected_updated_at = expected_updated_at
        self.actual_updated_at = actual_updated_at
        super().__init__(
            f"Competition {record_id} was modified concurrently "
            f"(expected updated_at={expected_updated_at}, "
            f"found {actual_updated_at})"
        )


class NotFoundError(LifecycleError):
    """The referenced competition does not exist."""

    def __init__(self, record_id: Any) -> None:
        self.record_id = record_id
        super().__init__(f"Competition {record_id} not found")


class MalformedRecordError(LifecycleError):
    """A stored record cannot be mapped onto the canonical field set."""


__all__ = [
    "ConfirmationRequiredError",
    "ConflictError",
    "LifecycleError",
    "MalformedRecordError",
    "NotFoundError",
    "ValidationError",
]
