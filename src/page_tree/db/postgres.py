import logging
import uuid
from typing import Any

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from page_tree.core.filters import AllOf, AnyOf, IdIn, LocaleEquals, MultiLocaleFlag, PageFilter, PrivateFlag
from page_tree.db.schema import metadata, page_orders, pages
from page_tree.models import OrderRecord, PageNode

logger = logging.getLogger(__name__)

_PAGE_COLUMNS = (
    pages.c.id,
    pages.c.parent_id,
    pages.c.title,
    pages.c.uri,
    pages.c.locale,
    pages.c.is_multi_locale,
    pages.c.is_private,
)


def compile_filter(where: PageFilter) -> sa.ColumnElement[bool]:
    """Translate a typed page filter into a SQL boolean clause."""
    if isinstance(where, LocaleEquals):
        if where.locale is None:
            return sa.or_(pages.c.locale.is_(None), pages.c.locale == "")
        return pages.c.locale == where.locale
    if isinstance(where, MultiLocaleFlag):
        return pages.c.is_multi_locale.is_(where.value)
    if isinstance(where, PrivateFlag):
        return pages.c.is_private.is_(where.value)
    if isinstance(where, IdIn):
        if not where.ids:
            return sa.false()
        return pages.c.id.in_(where.ids)
    if isinstance(where, AllOf):
        return sa.and_(sa.true(), *(compile_filter(c) for c in where.clauses))
    if isinstance(where, AnyOf):
        return sa.or_(sa.false(), *(compile_filter(c) for c in where.clauses))
    raise TypeError(f"Unsupported page filter: {where!r}")


def _row_to_page(row: Any) -> PageNode:
    return PageNode(
        id=str(row.id),
        parent_id=str(row.parent_id),
        title=row.title,
        uri=row.uri,
        locale=row.locale,
        is_multi_locale=bool(row.is_multi_locale),
        is_private=bool(row.is_private),
    )


def _page_values(page: PageNode) -> dict[str, Any]:
    return {
        "parent_id": page.parent_id,
        "title": page.title,
        "uri": page.uri,
        "locale": page.locale,
        "is_multi_locale": page.is_multi_locale,
        "is_private": page.is_private,
    }


class PostgresPageRepository:
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def find_all(self, where: PageFilter | None = None) -> list[PageNode]:
        stmt = sa.select(*_PAGE_COLUMNS).order_by(pages.c.seq)
        if where is not None:
            stmt = stmt.where(compile_filter(where))
        async with self._engine.connect() as conn:
            result = await conn.execute(stmt)
            return [_row_to_page(row) for row in result]

    async def find_one(self, page_id: str) -> PageNode | None:
        stmt = sa.select(*_PAGE_COLUMNS).where(pages.c.id == str(page_id))
        async with self._engine.connect() as conn:
            row = (await conn.execute(stmt)).first()
        return _row_to_page(row) if row is not None else None

    async def save(self, page: PageNode) -> PageNode:
        page_id = page.id or str(uuid.uuid4())
        async with self._engine.begin() as conn:
            await conn.execute(sa.insert(pages).values(id=page_id, **_page_values(page)))
        return page.model_copy(update={"id": page_id})

    async def update(self, page: PageNode) -> PageNode:
        async with self._engine.begin() as conn:
            result = await conn.execute(sa.update(pages).where(pages.c.id == page.id).values(**_page_values(page)))
            if result.rowcount == 0:
                raise KeyError(page.id)
        return page

    async def delete(self, page_id: str) -> None:
        async with self._engine.begin() as conn:
            await conn.execute(sa.delete(pages).where(pages.c.id == str(page_id)))


class PostgresOrderStore:
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def find_one(self, parent_id: str) -> OrderRecord | None:
        stmt = sa.select(page_orders.c.parent_id, page_orders.c.child_ids).where(
            page_orders.c.parent_id == str(parent_id)
        )
        async with self._engine.connect() as conn:
            row = (await conn.execute(stmt)).first()
        if row is None:
            return None
        return OrderRecord(parent_id=row.parent_id, order=list(row.child_ids or []))

    async def find_all(self) -> list[OrderRecord]:
        stmt = sa.select(page_orders.c.parent_id, page_orders.c.child_ids).order_by(page_orders.c.parent_id)
        async with self._engine.connect() as conn:
            result = await conn.execute(stmt)
            return [OrderRecord(parent_id=row.parent_id, order=list(row.child_ids or [])) for row in result]

    async def upsert(self, parent_id: str, order: list[str]) -> OrderRecord:
        record = OrderRecord(parent_id=str(parent_id), order=list(order))
        stmt = insert(page_orders).values(parent_id=record.parent_id, child_ids=record.order)
        stmt = stmt.on_conflict_do_update(
            index_elements=[page_orders.c.parent_id],
            set_={"child_ids": stmt.excluded.child_ids},
        )
        async with self._engine.begin() as conn:
            await conn.execute(stmt)
        return record

    async def delete(self, parent_id: str) -> None:
        async with self._engine.begin() as conn:
            await conn.execute(sa.delete(page_orders).where(page_orders.c.parent_id == str(parent_id)))


class PostgresHierarchyDatabase:
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._pages = PostgresPageRepository(engine)
        self._orders = PostgresOrderStore(engine)

    @property
    def pages(self) -> PostgresPageRepository:
        return self._pages

    @property
    def orders(self) -> PostgresOrderStore:
        return self._orders

    async def ensure_ready(self) -> None:
        """Create the tables when migrations have not been run."""
        async with self._engine.begin() as conn:
            await conn.run_sync(metadata.create_all, checkfirst=True)

    async def ping(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(sa.text("SELECT 1"))
            return True
        except Exception:
            logger.warning("Database ping failed", exc_info=True)
            return False

    async def dispose(self) -> None:
        await self._engine.dispose()
