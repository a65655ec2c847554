"""create admins table

Revision ID: 9b47e0c3a5d2
Revises: 3f1c9a2b7d10
Create Date: 2026-10-05 09:40:02.507113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "9b47e0c3a5d2"
down_revision: Union[str, Sequence[str], None] = "3f1c9a2b7d10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if "admins" in inspector.get_table_names():
        return

    op.create_table(
        "admins",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if "admins" in inspector.get_table_names():
        index_names = {idx["name"] for idx in inspector.get_indexes("admins")}
        if "ix_admins_email" in index_names:
            op.drop_index("ix_admins_email", table_name="admins")
        op.drop_table("admins")
