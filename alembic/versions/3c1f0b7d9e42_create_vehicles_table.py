"""Create vehicles table

Revision ID: 3c1f0b7d9e42
Revises:
Create Date: 2026-10-19 10:12:04.311520

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c1f0b7d9e42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "vehicles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "date_added",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("type", sa.String(length=4), nullable=False),
        sa.Column("msrp", sa.Numeric(precision=20, scale=2), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("make", sa.String(length=255), nullable=False),
        sa.Column("model", sa.String(length=255), nullable=False),
        sa.Column("miles", sa.Integer(), nullable=False),
        sa.Column("vin", sa.String(length=255), nullable=False),
        sa.Column("deleted", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("vin"),
    )
    op.create_index("ix_vehicles_type_deleted", "vehicles", ["type", "deleted"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_vehicles_type_deleted", table_name="vehicles")
    op.drop_table("vehicles")
