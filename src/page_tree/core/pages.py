"""Page mutations that keep order records and the flat index consistent."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from page_tree.core.errors import HierarchyCycleError, InvalidPageError, PageNotFoundError
from page_tree.core.filters import visibility_filter
from page_tree.core.flat_index import HierarchyIndexCache
from page_tree.core.ordering import OrderingService
from page_tree.core.ports.database import HierarchyDatabase
from page_tree.models import ROOT_ID, PageNode, is_equal_ids

logger = logging.getLogger(__name__)

_URI_PATTERN = re.compile(r"^[a-z0-9'\-/]+$", re.IGNORECASE)
_EDITABLE_FIELDS = frozenset({"title", "uri", "locale", "is_multi_locale", "is_private"})


def _check_uri(uri: str | None) -> None:
    if uri and not _URI_PATTERN.match(uri):
        raise InvalidPageError(f"Uri {uri!r} has unexpected characters")


class PageService:
    def __init__(
        self,
        database: HierarchyDatabase,
        ordering: OrderingService,
        index: HierarchyIndexCache,
    ) -> None:
        self._db = database
        self._ordering = ordering
        self._index = index

    async def get(self, page_id: str, authorized: bool = False) -> PageNode:
        page = await self._db.pages.find_one(str(page_id))
        if page is None or (page.is_private and not authorized):
            raise PageNotFoundError(str(page_id))
        return page

    async def get_all_pages(
        self,
        locale: str | None = None,
        ids: Iterable[str] = (),
        authorized: bool = False,
    ) -> list[PageNode]:
        """Visible pages; ``ids`` are kept regardless of their locale."""
        return await self._db.pages.find_all(visibility_filter(locale, authorized, ids))

    async def create(self, page: PageNode) -> PageNode:
        _check_uri(page.uri)
        parent_id = str(page.parent_id or ROOT_ID)
        if not is_equal_ids(parent_id, ROOT_ID) and await self._db.pages.find_one(parent_id) is None:
            raise PageNotFoundError(parent_id)

        saved = await self._db.pages.save(page.model_copy(update={"parent_id": parent_id}))
        await self._ordering.insert_child(parent_id, saved.id)
        logger.info("Created page %s under %s", saved.id, parent_id)
        await self._refresh()
        return saved

    async def update(self, page_id: str, **changes: Any) -> PageNode:
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise InvalidPageError(f"Fields cannot be updated here: {', '.join(sorted(unknown))}")
        _check_uri(changes.get("uri"))

        page = await self.get(page_id, authorized=True)
        try:
            merged = PageNode.model_validate({**page.model_dump(), **changes})
        except ValidationError as exc:
            raise InvalidPageError(f"Invalid values for page {page_id!r}: {exc.error_count()} error(s)") from exc
        updated = await self._db.pages.update(merged)
        logger.info("Updated page %s (%s)", page_id, ", ".join(sorted(changes)) or "no fields")
        await self._refresh()
        return updated

    async def move(self, page_id: str, new_parent_id: str, before_id: str | None = None) -> PageNode:
        page = await self.get(page_id, authorized=True)
        new_parent_id = str(new_parent_id or ROOT_ID)
        if not is_equal_ids(new_parent_id, ROOT_ID):
            if await self._db.pages.find_one(new_parent_id) is None:
                raise PageNotFoundError(new_parent_id)
            if await self._ordering.is_descendant(new_parent_id, page.id):
                raise HierarchyCycleError(page.id, new_parent_id)

        old_parent_id = page.parent_id
        moved = page
        if not is_equal_ids(old_parent_id, new_parent_id):
            moved = await self._db.pages.update(page.model_copy(update={"parent_id": new_parent_id}))
            await self._ordering.remove_child(old_parent_id, page.id)
        await self._ordering.place_before(new_parent_id, page.id, before_id)
        logger.info("Moved page %s from %s to %s", page.id, old_parent_id, new_parent_id)
        await self._refresh()
        return moved

    async def reorder(self, page_id: str, before_id: str | None = None) -> None:
        page = await self.get(page_id, authorized=True)
        await self._ordering.place_before(page.parent_id, page.id, before_id)
        await self._refresh()

    async def delete(self, page_id: str) -> PageNode:
        """Delete a page; its children keep pointing at it and become orphans."""
        page = await self.get(page_id, authorized=True)
        await self._db.pages.delete(page.id)
        await self._ordering.remove_child(page.parent_id, page.id)
        await self._ordering.drop_order(page.id)
        logger.info("Deleted page %s", page.id)
        await self._refresh()
        return page

    async def _refresh(self) -> None:
        self._index.invalidate()
        await self._index.regenerate()
