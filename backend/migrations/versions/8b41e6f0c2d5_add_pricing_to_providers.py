"""add pricing to providers

Revision ID: 8b41e6f0c2d5
Revises: 3f2a9c1d7e10
Create Date: 2026-02-03 16:22:08.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8b41e6f0c2d5"
down_revision: str | Sequence[str] | None = "3f2a9c1d7e10"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    with op.batch_alter_table("providers", schema=None) as batch_op:
        batch_op.add_column(sa.Column("pricing", sa.JSON(), nullable=True))


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table("providers", schema=None) as batch_op:
        batch_op.drop_column("pricing")
