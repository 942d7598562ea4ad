"""Detect competitions whose stored status lags behind their timeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .phase import compute_phase
from .record import CompetitionRecord
from .status import MANUAL_STATUSES, CompetitionStatus, Phase, status_for


@dataclass(frozen=True)
class DriftReport:
    needs_update: bool
    current_status: CompetitionStatus
    computed_phase: Phase

    @property
    def target_status(self) -> CompetitionStatus:
        """Status the record should be written to."""
        if not self.needs_update:
            return self.current_status
        return status_for(self.computed_phase)


def detect_drift(record: CompetitionRecord, now: datetime) -> DriftReport:
    """Compare the persisted status with the computed phase.

    Draft and archive are authoritative over any computed phase and are
    always reported in sync.
    """
    phase = compute_phase(record, now)
    if record.status in MANUAL_STATUSES:
        return DriftReport(
            needs_update=False,
            current_status=record.status,
            computed_phase=phase,
        )
    return DriftReport(
        needs_update=record.status.value != phase.value,
        current_status=record.status,
        computed_phase=phase,
    )


__all__ = ["DriftReport", "detect_drift"]
