"""Persistence for competition records.

The executor is the only caller of ``compare_and_set_status``.  Every
write is conditional on the caller's ``updated_at`` token, so concurrent
writers to the same competition never overwrite each other silently.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Protocol

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eliterank.logging_config import get_logger

from .clock import ensure_utc
from .record import CompetitionRecord
from .status import SETTLED_STATUSES, CompetitionStatus

logger = get_logger(__name__)


def same_instant(a: datetime | None, b: datetime | None) -> bool:
    """Compare two optional timestamps regardless of tz representation."""
    if a is None or b is None:
        return a is None and b is None
    return ensure_utc(a) == ensure_utc(b)


class CompetitionStore(Protocol):
    async def get(self, record_id: Any) -> CompetitionRecord | None: ...

    async def list_for_reconciliation(self) -> list[CompetitionRecord]: ...

    async def compare_and_set_status(
        self,
        record_id: Any,
        new_status: CompetitionStatus,
        *,
        expected_updated_at: datetime | None,
        updated_at: datetime,
    ) -> CompetitionRecord | None:
        """Write the status if ``updated_at`` still matches; None otherwise."""
        ...


class InMemoryCompetitionStore:
    """Dict-backed store for embedding the engine and for tests.

    Check and write in ``compare_and_set_status`` happen without an await
    in between, which makes them atomic on a single event loop.
    """

    def __init__(self, records: Iterable[CompetitionRecord] = ()) -> None:
        self._records: dict[Any, CompetitionRecord] = {}
        for record in records:
            self.add(record)

    def add(self, record: CompetitionRecord) -> None:
        self._records[record.id] = record

    def remove(self, record_id: Any) -> None:
        self._records.pop(record_id, None)

    async def get(self, record_id: Any) -> CompetitionRecord | None:
        return self._records.get(record_id)

    async def list_for_reconciliation(self) -> list[CompetitionRecord]:
        return [r for r in self._records.values() if r.status not in SETTLED_STATUSES]

    async def compare_and_set_status(
        self,
        record_id: Any,
        new_status: CompetitionStatus,
        *,
        expected_updated_at: datetime | None,
        updated_at: datetime,
    ) -> CompetitionRecord | None:
        current = self._records.get(record_id)
        if current is None or not same_instant(current.updated_at, expected_updated_at):
            return None
        updated = current.with_status(new_status, updated_at)
        self._records[record_id] = updated
        return updated


class SqlCompetitionStore:
    """Store backed by the ``competitions`` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, record_id: Any) -> CompetitionRecord | None:
        from eliterank.models import Competition

        result = await self.session.execute(
            select(Competition).where(Competition.id == record_id)
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return CompetitionRecord.from_row(row)

    async def list_for_reconciliation(self) -> list[CompetitionRecord]:
        from eliterank.models import Competition

        result = await self.session.execute(
            select(Competition)
            .where(Competition.status.not_in([s.value for s in SETTLED_STATUSES]))
            .order_by(Competition.updated_at)
        )
        return [CompetitionRecord.from_row(row) for row in result.scalars().all()]

    async def compare_and_set_status(
        self,
        record_id: Any,
        new_status: CompetitionStatus,
        *,
        expected_updated_at: datetime | None,
        updated_at: datetime,
    ) -> CompetitionRecord | None:
        from eliterank.models import Competition

        try:
            result = await self.session.execute(
                update(Competition)
                .where(
                    Competition.id == record_id,
                    Competition.updated_at == expected_updated_at,
                )
                .values(status=new_status.value, updated_at=updated_at)
                .returning(Competition)
                .execution_options(synchronize_session=False)
            )
        except Exception:
            # The session is shared across a sweep; leave it usable.
            await self.session.rollback()
            raise
        row = result.scalar_one_or_none()
        if row is None:
            await self.session.rollback()
            return None

        await self.session.commit()
        logger.debug(
            "competition_status_written",
            competition_id=str(record_id),
            status=new_status.value,
        )
        return CompetitionRecord.from_row(row)


__all__ = [
    "CompetitionStore",
    "InMemoryCompetitionStore",
    "SqlCompetitionStore",
    "same_instant",
]
