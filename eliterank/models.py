"""SQLAlchemy ORM models for the competition lifecycle tables."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Index, Text, text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import DateTime, Integer

from eliterank.lifecycle.status import CompetitionStatus

STATUS_VALUES = ",".join(f"'{status.value}'" for status in CompetitionStatus)


class Base(DeclarativeBase):
    pass


class Competition(Base):
    __tablename__ = "competitions"
    __table_args__ = (
        Index("idx_competitions_status", "status"),
        CheckConstraint(f"status IN ({STATUS_VALUES})", name="ck_competition_status"),
        CheckConstraint(
            "min_contestants IS NULL OR max_contestants IS NULL "
            "OR min_contestants <= max_contestants",
            name="ck_competition_contestant_bounds",
        ),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), primary_key=True, default=uuid4
    )
    name: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=text("'draft'")
    )

    # Timeline boundaries
    nomination_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    nomination_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    voting_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    voting_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    finals_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # References owned by other services; only presence matters here.
    city_id: Mapped[str | None] = mapped_column(Text)
    category_id: Mapped[str | None] = mapped_column(Text)
    demographic_id: Mapped[str | None] = mapped_column(Text)
    host_id: Mapped[str | None] = mapped_column(Text)

    min_contestants: Mapped[int | None] = mapped_column(Integer)
    max_contestants: Mapped[int | None] = mapped_column(Integer)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("now()"), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("now()"), nullable=False
    )
