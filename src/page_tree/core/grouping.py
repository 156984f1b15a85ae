"""Whole-hierarchy listings for parent pickers."""

from __future__ import annotations

from page_tree.core.filters import visibility_filter
from page_tree.core.ordering import OrderingService
from page_tree.core.ports.database import PageRepository
from page_tree.models import PageNode, is_equal_ids


def remove_children(pages: list[PageNode | None], parent_id: str | None) -> list[PageNode | None]:
    """Null out, in place, every entry below ``parent_id``, transitively.

    Returns the same list so calls can be chained.
    """
    for index, item in enumerate(pages):
        if item is None or not is_equal_ids(item.parent_id, parent_id):
            continue
        pages[index] = None
        remove_children(pages, item.id)
    return pages


class PageGroupingService:
    def __init__(self, pages: PageRepository, ordering: OrderingService) -> None:
        self._pages = pages
        self._ordering = ordering

    async def group_by_parent(self, exclude_id: str | None = None, authorized: bool = False) -> list[PageNode]:
        """All pages reachable from the root order, each followed by its ordered subtree.

        With ``exclude_id`` that page and everything below it are left out.
        Private pages are skipped unless ``authorized``; their ordered children
        are still listed.
        """
        root_order = await self._ordering.get_root_order()
        if not root_order.order:
            return []

        child_orders = {str(o.parent_id): o.order for o in await self._ordering.get_child_orders()}
        pages_by_id = {str(p.id): p for p in await self._pages.find_all(visibility_filter(authorized=authorized))}

        ids: list[str] = []
        seen: set[str] = set()

        def _expand(page_id: str) -> None:
            if page_id in seen or (exclude_id and is_equal_ids(page_id, exclude_id)):
                return
            seen.add(page_id)
            ids.append(page_id)
            for child_id in child_orders.get(page_id, []):
                _expand(str(child_id))

        for root_id in root_order.order:
            _expand(str(root_id))

        result: list[PageNode | None] = [pages_by_id[i] for i in ids if i in pages_by_id]
        if exclude_id:
            remove_children(result, exclude_id)
        return [p for p in result if p is not None]

    async def get_all_except_children(
        self,
        parent_id: str,
        locale: str | None = None,
        authorized: bool = False,
    ) -> list[PageNode]:
        """Visible pages that are not descendants of ``parent_id``."""
        pages: list[PageNode | None] = list(await self._pages.find_all(visibility_filter(locale, authorized)))
        remove_children(pages, parent_id)
        return [p for p in pages if p is not None]
