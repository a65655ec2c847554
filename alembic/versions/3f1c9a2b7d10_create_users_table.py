"""create users table

Revision ID: 3f1c9a2b7d10
Revises: 
Create Date: 2026-10-05 09:12:44.118230

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if "users" in inspector.get_table_names():
        return

    if bind.dialect.name == "postgresql":
        goal_enum = postgresql.ENUM("weightLoss", "weightGain", "maintain", name="goal", create_type=False)
        goal_enum.create(bind, checkfirst=True)
    else:
        goal_enum = sa.Enum("weightLoss", "weightGain", "maintain", name="goal")

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("gender", sa.String(length=32), nullable=False),
        sa.Column("dob", sa.Date(), nullable=False),
        sa.Column("goal", goal_enum, nullable=False),
        sa.Column("activity_level", sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if "users" in inspector.get_table_names():
        index_names = {idx["name"] for idx in inspector.get_indexes("users")}
        if "ix_users_email" in index_names:
            op.drop_index("ix_users_email", table_name="users")
        op.drop_table("users")

    if bind.dialect.name == "postgresql":
        postgresql.ENUM(name="goal").drop(bind, checkfirst=True)
