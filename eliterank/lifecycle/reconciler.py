"""Reconciliation sweep: apply date-driven transitions that are due.

Meant to run on an interval (see ``eliterank.services.reconciliation_service``).
Each sweep inspects every competition that can still move automatically,
and writes the computed status through the executor with the record's own
``updated_at`` token.  A record that changed underneath the sweep is
skipped and picked up by the next one.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from eliterank.logging_config import get_logger

from .clock import Clock, SystemClock
from .drift import detect_drift
from .exceptions import ConflictError
from .executor import TransitionExecutor
from .state_machine import is_automatic_transition, validate_transition
from .store import CompetitionStore

logger = get_logger(__name__)


@dataclass
class ReconciliationReport:
    checked: int = 0
    transitioned: list[dict] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: list[dict] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "checked": self.checked,
            "transitioned": self.transitioned,
            "conflicts": self.conflicts,
            "failed": self.failed,
            "skipped": self.skipped,
        }


async def reconcile_once(
    store: CompetitionStore,
    clock: Clock | None = None,
) -> ReconciliationReport:
    """Run one sweep over *store*.

    * Draft, archive and completed records are never touched.
    * Only forward, automatic moves are applied; archive never is.
    * Conflicts and per-record failures are logged and left for the
      next sweep.
    """
    clock = clock or SystemClock()
    executor = TransitionExecutor(store, clock)
    report = ReconciliationReport()
    now = clock.now()

    for record in await store.list_for_reconciliation():
        report.checked += 1
        drift = detect_drift(record, now)
        if not drift.needs_update:
            continue

        target = drift.target_status
        if not is_automatic_transition(record.status, target):
            report.skipped.append({
                "id": str(record.id),
                "from": record.status.value,
                "to": target.value,
                "reason": "not_automatic",
            })
            continue

        validation = validate_transition(record, target)
        if not validation.valid:
            logger.warning(
                "reconcile_transition_invalid",
                competition_id=str(record.id),
                to_status=target.value,
                errors=validation.errors,
            )
            report.skipped.append({
                "id": str(record.id),
                "from": record.status.value,
                "to": target.value,
                "reason": "invalid",
            })
            continue

        try:
            await executor.execute(record.id, target, record.updated_at)
        except ConflictError:
            report.conflicts.append(str(record.id))
            continue
        except Exception:
            logger.exception("reconcile_transition_failed", competition_id=str(record.id))
            report.failed.append(str(record.id))
            continue

        report.transitioned.append({
            "id": str(record.id),
            "from": record.status.value,
            "to": target.value,
        })

    if report.transitioned or report.conflicts or report.failed:
        logger.info(
            "reconcile_sweep_complete",
            checked=report.checked,
            transitioned=len(report.transitioned),
            conflicts=len(report.conflicts),
            failed=len(report.failed),
        )
    return report


__all__ = ["ReconciliationReport", "reconcile_once"]
