"""Access records

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18 12:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "access_records",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("person_id", sa.Uuid(), nullable=True),
        sa.Column("access_control_device_id", sa.Uuid(), nullable=True),
        sa.Column("type", sa.String(10), nullable=False),
        sa.Column("result", sa.String(20), nullable=False),
        sa.Column("access_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_access_records_person_id", "access_records", ["person_id"])
    op.create_index(
        "ix_access_records_access_control_device_id",
        "access_records",
        ["access_control_device_id"],
    )
    op.create_index("ix_access_records_access_time", "access_records", ["access_time"])


def downgrade() -> None:
    op.drop_table("access_records")
