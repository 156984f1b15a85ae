"""Explicit sibling ordering kept in per-parent order records.

Every mutation reads the current record, builds a new duplicate-free list and
writes it back with one upsert. Nothing guards concurrent writers on the same
parent: the last upsert wins.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from page_tree.core.filters import is_locale_compatible
from page_tree.core.ports.database import HierarchyDatabase
from page_tree.models import ROOT_ID, OrderRecord, PageNode, is_equal_ids

logger = logging.getLogger(__name__)


def _without(order: Sequence[str], child_id: str) -> list[str]:
    return [i for i in order if not is_equal_ids(i, child_id)]


class OrderingService:
    def __init__(self, database: HierarchyDatabase) -> None:
        self._db = database

    async def get_root_order(self) -> OrderRecord:
        return await self.get_child_order(ROOT_ID)

    async def get_child_order(self, parent_id: str) -> OrderRecord:
        record = await self._db.orders.find_one(str(parent_id))
        if record is None:
            return OrderRecord(parent_id=str(parent_id))
        return record

    async def get_all(self) -> list[OrderRecord]:
        return await self._db.orders.find_all()

    async def get_child_orders(self) -> list[OrderRecord]:
        """Every order record except the root one."""
        return [r for r in await self._db.orders.find_all() if not is_equal_ids(r.parent_id, ROOT_ID)]

    async def get_ordered_children(
        self,
        pages: Sequence[PageNode],
        page_id: str,
        parent_id: str,
        exclude_self: bool = False,
        locale: str | None = None,
    ) -> list[PageNode]:
        """Siblings of ``page_id`` under ``parent_id``, explicit order first.

        ``pages`` must already be filtered for the viewer. Children that point
        at ``parent_id`` but are missing from its order record follow the
        ordered ones in the order ``pages`` lists them.
        """
        record = await self.get_child_order(parent_id)
        unordered = [p.id for p in pages if is_equal_ids(p.parent_id, parent_id)]
        ids = list(dict.fromkeys([*record.order, *unordered]))

        by_id = {str(p.id): p for p in pages}
        result: list[PageNode] = []
        for child_id in ids:
            if exclude_self and is_equal_ids(child_id, page_id):
                continue
            page = by_id.get(str(child_id))
            if page is None or not is_locale_compatible(page, locale):
                continue
            result.append(page)
        return result

    async def insert_child(self, parent_id: str, child_id: str, position: int | None = None) -> OrderRecord:
        """Put ``child_id`` at ``position`` (append when ``None``), moving an existing entry."""
        record = await self.get_child_order(parent_id)
        order = _without(record.order, child_id)
        if position is None or position >= len(order):
            order.append(str(child_id))
        else:
            order.insert(max(position, 0), str(child_id))
        logger.debug("Inserted %s under %s at %s", child_id, parent_id, position)
        return await self._db.orders.upsert(str(parent_id), order)

    async def place_before(self, parent_id: str, child_id: str, before_id: str | None = None) -> OrderRecord:
        """Move ``child_id`` right above ``before_id``; to the end when it is absent or the root."""
        record = await self.get_child_order(parent_id)
        order = _without(record.order, child_id)
        position: int | None = None
        if before_id is not None and not is_equal_ids(before_id, ROOT_ID):
            for index, existing in enumerate(order):
                if is_equal_ids(existing, before_id):
                    position = index
                    break
        if position is None:
            order.append(str(child_id))
        else:
            order.insert(position, str(child_id))
        logger.debug("Placed %s before %s under %s", child_id, before_id, parent_id)
        return await self._db.orders.upsert(str(parent_id), order)

    async def remove_child(self, parent_id: str, child_id: str) -> OrderRecord:
        record = await self.get_child_order(parent_id)
        if not any(is_equal_ids(i, child_id) for i in record.order):
            return record
        logger.debug("Removed %s from %s", child_id, parent_id)
        return await self._db.orders.upsert(str(parent_id), _without(record.order, child_id))

    async def move_child(
        self,
        child_id: str,
        old_parent_id: str,
        new_parent_id: str,
        position: int | None = None,
    ) -> OrderRecord:
        """Move ``child_id`` between order records.

        Does not check for cycles; see ``is_descendant``.
        """
        if not is_equal_ids(old_parent_id, new_parent_id):
            await self.remove_child(old_parent_id, child_id)
        return await self.insert_child(new_parent_id, child_id, position)

    async def drop_order(self, parent_id: str) -> None:
        await self._db.orders.delete(str(parent_id))

    async def is_descendant(self, candidate_id: str, ancestor_id: str) -> bool:
        """True when ``candidate_id`` is ``ancestor_id`` or sits anywhere below it.

        Children are taken from both order records and ``parent_id`` links so
        a move can be rejected before it closes a cycle.
        """
        if is_equal_ids(candidate_id, ancestor_id):
            return True
        children: dict[str, list[str]] = {}
        for record in await self._db.orders.find_all():
            children.setdefault(str(record.parent_id), []).extend(record.order)
        for page in await self._db.pages.find_all():
            children.setdefault(str(page.parent_id), []).append(str(page.id))

        seen: set[str] = set()
        stack = [str(ancestor_id)]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            for child in children.get(current, []):
                if is_equal_ids(child, candidate_id):
                    return True
                stack.append(str(child))
        return False
