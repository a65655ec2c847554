"""create tracking entry tables

Revision ID: d82a61f4c0e9
Revises: 9b47e0c3a5d2
Create Date: 2026-10-06 14:03:27.940551

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "d82a61f4c0e9"
down_revision: Union[str, Sequence[str], None] = "9b47e0c3a5d2"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENTRY_TABLES: dict[str, list[sa.Column]] = {
    "weight_entries": [sa.Column("weight", sa.Float(), nullable=False)],
    "height_entries": [sa.Column("height", sa.Float(), nullable=False)],
    "sleep_entries": [sa.Column("duration_in_hrs", sa.Float(), nullable=False)],
    "step_entries": [sa.Column("steps", sa.Integer(), nullable=False)],
    "water_entries": [sa.Column("amount_in_milliliters", sa.Float(), nullable=False)],
    "workout_entries": [
        sa.Column("exercise", sa.String(length=200), nullable=False),
        sa.Column("duration_in_minutes", sa.Float(), nullable=False),
    ],
    "calorie_intake_entries": [
        sa.Column("item", sa.String(length=200), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("quantitytype", sa.String(length=50), nullable=False),
        sa.Column("calorie_intake", sa.Float(), nullable=False),
    ],
}


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    table_names = inspector.get_table_names()

    for table_name, value_columns in ENTRY_TABLES.items():
        if table_name in table_names:
            continue
        op.create_table(
            table_name,
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("date", sa.DateTime(), nullable=False),
            *value_columns,
            sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{table_name}_user_id", table_name, ["user_id"], unique=False)
        op.create_index(f"ix_{table_name}_date", table_name, ["date"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    table_names = inspector.get_table_names()

    for table_name in reversed(list(ENTRY_TABLES)):
        if table_name not in table_names:
            continue
        index_names = {idx["name"] for idx in inspector.get_indexes(table_name)}
        for index_name in (f"ix_{table_name}_date", f"ix_{table_name}_user_id"):
            if index_name in index_names:
                op.drop_index(index_name, table_name=table_name)
        op.drop_table(table_name)
