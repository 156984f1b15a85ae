import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

metadata = sa.MetaData(schema="public")

pages = sa.Table(
    "pages",
    metadata,
    sa.Column("id", sa.Text, primary_key=True),
    # Insertion sequence; used as discovery order for unordered children.
    sa.Column("seq", sa.BigInteger, sa.Identity(), nullable=False),
    sa.Column("parent_id", sa.Text, nullable=False, server_default="0"),
    sa.Column("title", sa.Text, nullable=False, server_default=""),
    sa.Column("uri", sa.Text, nullable=True),
    sa.Column("locale", sa.Text, nullable=True),
    sa.Column("is_multi_locale", sa.Boolean, nullable=False, server_default=sa.false()),
    sa.Column("is_private", sa.Boolean, nullable=False, server_default=sa.false()),
    sa.Index("ix_pages_parent_id", "parent_id"),
)

page_orders = sa.Table(
    "page_orders",
    metadata,
    sa.Column("parent_id", sa.Text, primary_key=True),
    sa.Column("child_ids", postgresql.ARRAY(sa.Text), nullable=False, server_default="{}"),
)
