"""Create competitions table.

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "competitions",
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'draft'")),
        sa.Column("nomination_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("nomination_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("voting_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("voting_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("finals_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("city_id", sa.Text(), nullable=True),
        sa.Column("category_id", sa.Text(), nullable=True),
        sa.Column("demographic_id", sa.Text(), nullable=True),
        sa.Column("host_id", sa.Text(), nullable=True),
        sa.Column("min_contestants", sa.Integer(), nullable=True),
        sa.Column("max_contestants", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint(
            "status IN ('draft','publish','nomination','voting','judging','completed','archive')",
            name="ck_competition_status",
        ),
        sa.CheckConstraint(
            "min_contestants IS NULL OR max_contestants IS NULL OR min_contestants <= max_contestants",
            name="ck_competition_contestant_bounds",
        ),
    )
    op.create_index("idx_competitions_status", "competitions", ["status"])


def downgrade() -> None:
    op.drop_index("idx_competitions_status", table_name="competitions")
    op.drop_table("competitions")
