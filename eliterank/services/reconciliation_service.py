"""Background reconciliation of competition statuses.

Runs as an asyncio task during the application lifespan.  Every
``ELITERANK_RECONCILE_INTERVAL_SECONDS`` it opens a session, sweeps the
competitions table and applies any date-driven transitions that are due.
"""

import asyncio

from eliterank.config import get_settings
from eliterank.database import get_db_session
from eliterank.lifecycle.clock import Clock
from eliterank.lifecycle.reconciler import ReconciliationReport, reconcile_once
from eliterank.lifecycle.store import SqlCompetitionStore
from eliterank.logging_config import get_logger

logger = get_logger(__name__)


async def run_reconciliation_cycle(clock: Clock | None = None) -> ReconciliationReport:
    """Single cycle: sweep all competitions once."""
    async with get_db_session() as session:
        return await reconcile_once(SqlCompetitionStore(session), clock)


async def reconciliation_loop(
    stop_event: asyncio.Event,
    interval_seconds: float | None = None,
    clock: Clock | None = None,
):
    """Main reconciliation loop. Runs until stop_event is set."""
    interval = interval_seconds or get_settings().reconcile_interval_seconds
    logger.info("reconciliation_started", interval_seconds=interval)

    while not stop_event.is_set():
        try:
            await run_reconciliation_cycle(clock)
        except Exception:
            logger.exception("reconciliation_cycle_error")

        # Wait for the interval or until stopped
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval)
            break
        except asyncio.TimeoutError:
            pass

    logger.info("reconciliation_stopped")
