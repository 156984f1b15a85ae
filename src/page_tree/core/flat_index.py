"""Flattened, depth-first page sequence used for previous/next navigation."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from page_tree.core.cache import TtlCache
from page_tree.core.filters import is_visible, visibility_filter
from page_tree.core.ports.database import HierarchyDatabase
from page_tree.models import ROOT_ID, FlatEntry, OrderRecord, PageNode, is_equal_ids

logger = logging.getLogger(__name__)

CACHE_NAMESPACE = "pagesFlatArray"
DEFAULT_TTL_SECONDS = 120.0


def cache_key(locale: str | None, authorized: bool) -> str:
    return f"{CACHE_NAMESPACE}{locale or ''}:{authorized}"


def _matches(entry: FlatEntry, page_id: str, locale: str | None, authorized: bool) -> bool:
    return is_equal_ids(entry.id, page_id) and is_visible(entry, locale, authorized)


def _to_entry(page: PageNode, level: int) -> FlatEntry:
    return FlatEntry(
        id=page.id,
        parent_id=page.parent_id,
        root_id=ROOT_ID,
        level=level,
        title=page.title,
        locale=page.locale,
        is_multi_locale=page.is_multi_locale,
        is_private=page.is_private,
        uri=page.uri,
    )


def flatten_hierarchy(
    pages: Sequence[PageNode],
    orders: Sequence[OrderRecord],
    locale: str | None = None,
    authorized: bool = False,
) -> list[FlatEntry]:
    """Walk the root order depth-first, emitting each visible page before its children.

    Order entries without a matching visible page are skipped, but their own
    order records are still descended into. An id is emitted at most once.
    """
    pages_by_id = {str(p.id): p for p in pages}
    orders_by_parent = {str(o.parent_id): o for o in orders}
    root = orders_by_parent.get(ROOT_ID)
    if root is None:
        return []

    result: list[FlatEntry] = []
    visited: set[str] = {ROOT_ID}

    def _walk(page_id: str, level: int) -> None:
        if page_id in visited:
            logger.warning("Skipping %s: already reached through another order record", page_id)
            return
        visited.add(page_id)

        page = pages_by_id.get(page_id)
        if page is not None and is_visible(page, locale, authorized):
            result.append(_to_entry(page, level))

        order = orders_by_parent.get(page_id)
        if order is not None:
            for child_id in order.order:
                _walk(str(child_id), level + 1)

    for page_id in root.order:
        _walk(str(page_id), 0)

    orphans = [p.id for p in pages if str(p.id) not in visited and is_visible(p, locale, authorized)]
    if orphans:
        logger.warning("%d page(s) not reachable from the root order: %s", len(orphans), ", ".join(orphans))
    return result


class HierarchyIndexCache:
    def __init__(
        self,
        database: HierarchyDatabase,
        available_locales: Sequence[str] = (),
        max_menu_level: int = 7,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._db = database
        self._locales = list(dict.fromkeys(available_locales))
        self._max_menu_level = max_menu_level
        self._cache: TtlCache[list[FlatEntry]] = TtlCache(ttl=ttl, clock=clock)

    async def get(
        self,
        nesting_limit: int | None = 2,
        locale: str | None = None,
        authorized: bool = False,
    ) -> list[FlatEntry]:
        """Return the cached sequence for a view, regenerating it on a miss.

        ``nesting_limit`` keeps entries with ``level < nesting_limit``; pass
        ``None`` for the whole sequence.
        """
        entries = self._cache.get(cache_key(locale, authorized))
        if entries is None:
            logger.debug("Flat index miss for locale=%s authorized=%s", locale, authorized)
            entries = await self.regenerate(locale, authorized)
        if not nesting_limit:
            return list(entries)
        return [e for e in entries if e.level < nesting_limit]

    async def regenerate(self, locale: str | None = None, authorized: bool = False) -> list[FlatEntry]:
        """Rebuild and cache one view.

        Without a locale and with several configured locales, every locale
        view is rebuilt instead and nothing is returned.
        """
        if not locale and len(self._locales) > 1:
            for configured in self._locales:
                await self.regenerate(configured, authorized)
            return []

        t0 = time.perf_counter()
        pages = await self._db.pages.find_all(visibility_filter(locale, authorized))
        orders = await self._db.orders.find_all()
        entries = flatten_hierarchy(pages, orders, locale, authorized)
        self._cache.set(cache_key(locale, authorized), entries)
        logger.info(
            "Regenerated flat index locale=%s authorized=%s: %d entries in %.3fs",
            locale,
            authorized,
            len(entries),
            time.perf_counter() - t0,
        )
        return entries

    def invalidate(self) -> None:
        self._cache.clear()

    async def get_page_before(
        self,
        page_id: str,
        locale: str | None = None,
        authorized: bool = False,
    ) -> FlatEntry | None:
        entries = await self.get(self._max_menu_level, locale, authorized)
        index = self._index_of(entries, page_id, locale, authorized)
        if index is None or index == 0:
            return None
        return entries[index - 1]

    async def get_page_after(
        self,
        page_id: str,
        locale: str | None = None,
        authorized: bool = False,
    ) -> FlatEntry | None:
        entries = await self.get(self._max_menu_level, locale, authorized)
        index = self._index_of(entries, page_id, locale, authorized)
        if index is None or index >= len(entries) - 1:
            return None
        return entries[index + 1]

    @staticmethod
    def _index_of(entries: Sequence[FlatEntry], page_id: str, locale: str | None, authorized: bool) -> int | None:
        for index, entry in enumerate(entries):
            if _matches(entry, page_id, locale, authorized):
                return index
        return None
