"""add scheduled end to elections

Revision ID: 7c2e5b8f1a90
Revises: 3a7f21c9d4e8
Create Date: 2026-10-14 16:05:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "7c2e5b8f1a90"
down_revision = "3a7f21c9d4e8"
branch_labels = None
depends_on = None


def upgrade():
    op.add_column("elections", sa.Column("scheduled_end", sa.DateTime(), nullable=True))


def downgrade():
    op.drop_column("elections", "scheduled_end")
