"""The single writer of competition status."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from eliterank.logging_config import get_logger

from .clock import Clock, SystemClock, ensure_utc
from .exceptions import ConflictError, NotFoundError
from .record import CompetitionRecord
from .status import CompetitionStatus, parse_status
from .store import CompetitionStore, same_instant

logger = get_logger(__name__)


class TransitionExecutor:
    """Apply an already-validated, already-confirmed status change.

    The write only lands if the record's ``updated_at`` still equals the
    token the caller read.  A mismatch raises ConflictError and is never
    retried here: the caller must re-read and re-validate.
    """

    def __init__(self, store: CompetitionStore, clock: Clock | None = None):
        self.store = store
        self.clock = clock or SystemClock()

    def _next_token(self, current: datetime | None) -> datetime:
        now = ensure_utc(self.clock.now())
        # The token must change on every write, even under a frozen clock.
        if current is not None and now <= ensure_utc(current):
            return ensure_utc(current) + timedelta(microseconds=1)
        return now

    async def execute(
        self,
        record_id: Any,
        new_status: CompetitionStatus | str,
        expected_updated_at: datetime | None,
    ) -> CompetitionRecord:
        new = parse_status(new_status)

        current = await self.store.get(record_id)
        if current is None:
            raise NotFoundError(record_id)

        if not same_instant(current.updated_at, expected_updated_at):
            logger.info(
                "transition_conflict",
                competition_id=str(record_id),
                expected_updated_at=str(expected_updated_at),
                actual_updated_at=str(current.updated_at),
            )
            raise ConflictError(record_id, expected_updated_at, current.updated_at)

        if current.status is new:
            return current

        updated = await self.store.compare_and_set_status(
            record_id,
            new,
            expected_updated_at=current.updated_at,
            updated_at=self._next_token(current.updated_at),
        )
        if updated is None:
            # Lost the race between our read and our write.
            latest = await self.store.get(record_id)
            if latest is None:
                raise NotFoundError(record_id)
            logger.info(
                "transition_conflict",
                competition_id=str(record_id),
                expected_updated_at=str(expected_updated_at),
                actual_updated_at=str(latest.updated_at),
            )
            raise ConflictError(record_id, expected_updated_at, latest.updated_at)

        logger.info(
            "competition_transitioned",
            competition_id=str(record_id),
            from_status=current.status.value,
            to_status=new.value,
        )
        return updated


__all__ = ["TransitionExecutor"]
