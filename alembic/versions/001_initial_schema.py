"""Initial schema: pages table, page_orders table.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "pages",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("seq", sa.BigInteger, sa.Identity(), nullable=False),
        sa.Column("parent_id", sa.Text, nullable=False, server_default="0"),
        sa.Column("title", sa.Text, nullable=False, server_default=""),
        sa.Column("uri", sa.Text, nullable=True),
        sa.Column("locale", sa.Text, nullable=True),
        sa.Column("is_multi_locale", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_private", sa.Boolean, nullable=False, server_default=sa.false()),
        schema="public",
    )
    op.create_index("ix_pages_parent_id", "pages", ["parent_id"], schema="public")
    op.create_table(
        "page_orders",
        sa.Column("parent_id", sa.Text, primary_key=True),
        sa.Column("child_ids", postgresql.ARRAY(sa.Text), nullable=False, server_default="{}"),
        schema="public",
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("page_orders", schema="public")
    op.drop_index("ix_pages_parent_id", table_name="pages", schema="public")
    op.drop_table("pages", schema="public")
