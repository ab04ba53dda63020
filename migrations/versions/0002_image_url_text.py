"""Widen pets.image_url from VARCHAR(255) to TEXT

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-05

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade():
    with op.batch_alter_table("pets") as batch_op:
        batch_op.alter_column(
            "image_url",
            existing_type=sa.String(length=255),
            type_=sa.Text(),
            existing_nullable=True,
        )


def downgrade():
    with op.batch_alter_table("pets") as batch_op:
        batch_op.alter_column(
            "image_url",
            existing_type=sa.Text(),
            type_=sa.String(length=255),
            existing_nullable=True,
        )
