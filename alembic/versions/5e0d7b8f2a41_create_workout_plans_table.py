"""create workout plans table

Revision ID: 5e0d7b8f2a41
Revises: d82a61f4c0e9
Create Date: 2026-10-08 11:26:51.003918

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "5e0d7b8f2a41"
down_revision: Union[str, Sequence[str], None] = "d82a61f4c0e9"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if "workout_plans" in inspector.get_table_names():
        return

    op.create_table(
        "workout_plans",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("duration_in_minutes", sa.Float(), nullable=False),
        sa.Column("exercises", sa.JSON(), nullable=False),
        sa.Column("image_url", sa.String(length=1000), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workout_plans_name", "workout_plans", ["name"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if "workout_plans" in inspector.get_table_names():
        index_names = {idx["name"] for idx in inspector.get_indexes("workout_plans")}
        if "ix_workout_plans_name" in index_names:
            op.drop_index("ix_workout_plans_name", table_name="workout_plans")
        op.drop_table("workout_plans")
