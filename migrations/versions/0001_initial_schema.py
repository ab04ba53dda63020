"""Create pets and adoptions tables

Revision ID: 0001
Revises:
Create Date: 2026-09-28

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "pets",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("breed", sa.String(length=100), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(length=255), nullable=True),
        sa.Column(
            "status", sa.String(length=20), nullable=False, server_default="available"
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("age >= 0", name="ck_pet_age_non_negative"),
        sa.CheckConstraint(
            "status IN ('available', 'adopted')", name="ck_pet_status_known"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_pets_status", "pets", ["status"], unique=False)

    op.create_table(
        "adoptions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("pet_id", sa.Integer(), nullable=False),
        sa.Column("adopter_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("adoption_date", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["pet_id"], ["pets.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_adoptions_pet_id", "adoptions", ["pet_id"], unique=False)
    op.create_index(
        "ix_adoptions_adoption_date", "adoptions", ["adoption_date"], unique=False
    )


def downgrade():
    op.drop_index("ix_adoptions_adoption_date", table_name="adoptions")
    op.drop_index("ix_adoptions_pet_id", table_name="adoptions")
    op.drop_table("adoptions")
    op.drop_index("ix_pets_status", table_name="pets")
    op.drop_table("pets")
