"""Display phase computed from status and timeline dates.

Timeline dates are the source of truth for when a competition *should*
move forward; the persisted status may lag behind until the
reconciliation sweep applies the change.
"""

from __future__ import annotations

from datetime import datetime

from .clock import ensure_utc
from .record import CompetitionRecord
from .status import CompetitionStatus, Phase, phase_for, sequence_index


def _boundaries(record: CompetitionRecord) -> list[tuple[datetime | None, Phase]]:
    return [
        (record.nomination_start, Phase.NOMINATION),
        (record.voting_start, Phase.VOTING),
        (record.voting_end, Phase.JUDGING),
        (record.finals_date, Phase.COMPLETED),
    ]


def timeline_phase(
    record: CompetitionRecord,
    now: datetime,
    *,
    ceiling: Phase = Phase.COMPLETED,
) -> Phase | None:
    """Latest phase whose boundary has passed, walking boundaries in order.

    Unset boundaries are skipped rather than treated as gates.  The walk
    stops at the first configured boundary that has not been reached, so
    a stray later date never pulls the phase past an earlier one.  A
    passed boundary at or beyond *ceiling* yields *ceiling*.
    Returns None when no boundary has been reached.
    """
    now = ensure_utc(now)
    reached: Phase | None = None
    for boundary, phase in _boundaries(record):
        if boundary is None:
            continue
        if now < ensure_utc(boundary):
            break
        if sequence_index(phase) >= sequence_index(ceiling):
            return ceiling
        reached = phase
    return reached


def compute_phase(record: CompetitionRecord, now: datetime) -> Phase:
    """Return the phase a competition is in at *now*.

    * draft / archive   -> unchanged, manual states never auto-compute
    * completed         -> completed
    * publish           -> nomination once ``nomination_start`` has passed,
                           then voting / judging as later boundaries pass;
                           capped at judging
    * nomination..judging -> advanced by the same walk (including
                           ``finals_date`` -> completed), never backwards
    """
    status = record.status

    if status in (CompetitionStatus.DRAFT, CompetitionStatus.ARCHIVED):
        return phase_for(status)

    if status is CompetitionStatus.COMPLETED:
        return Phase.COMPLETED

    if status is CompetitionStatus.PUBLISHED:
        if record.nomination_start is None or ensure_utc(now) < ensure_utc(record.nomination_start):
            return Phase.PUBLISHED
        reached = timeline_phase(record, now, ceiling=Phase.JUDGING)
        return reached or Phase.PUBLISHED

    current = phase_for(status)
    reached = timeline_phase(record, now)
    if reached is not None and sequence_index(reached) > sequence_index(current):
        return reached
    return current


__all__ = ["compute_phase", "timeline_phase"]
