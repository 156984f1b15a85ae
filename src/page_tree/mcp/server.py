"""FastMCP server exposing page-tree tools."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from page_tree.config import HierarchySettings
from page_tree.core.filters import visibility_filter
from page_tree.core.flat_index import HierarchyIndexCache
from page_tree.core.grouping import PageGroupingService
from page_tree.core.menu import build_menu_tree
from page_tree.core.ordering import OrderingService
from page_tree.core.ports.database import HierarchyDatabase
from page_tree.models import ROOT_ID


def create_mcp_server(db: HierarchyDatabase, settings: HierarchySettings | None = None) -> FastMCP:
    """Create a FastMCP server wired to the given database."""
    settings = settings or HierarchySettings()
    index = HierarchyIndexCache(
        db,
        available_locales=settings.available_locales,
        max_menu_level=settings.max_menu_level,
        ttl=settings.cache_ttl,
    )
    grouping = PageGroupingService(db.pages, OrderingService(db))

    mcp = FastMCP("page-tree", instructions="Browse an ordered page hierarchy and its navigation order.")

    @mcp.tool()
    async def menu(locale: str | None = None, depth: int | None = None) -> list[dict[str, Any]]:
        """Nested navigation menu of public pages."""
        await db.ensure_ready()
        pages = await db.pages.find_all(visibility_filter(locale, False))
        orders = await db.orders.find_all()
        tree = build_menu_tree(ROOT_ID, pages, orders, max_level=depth or settings.menu_depth)
        return [node.model_dump() for node in tree]

    @mcp.tool()
    async def flat(locale: str | None = None, nesting_limit: int | None = 2) -> list[dict[str, Any]]:
        """Flattened navigation order of public pages."""
        await db.ensure_ready()
        return [e.model_dump() for e in await index.get(nesting_limit, locale)]

    @mcp.tool()
    async def neighbors(page_id: str, locale: str | None = None) -> dict[str, Any]:
        """Previous and next public page around ``page_id``."""
        await db.ensure_ready()
        before = await index.get_page_before(page_id, locale)
        after = await index.get_page_after(page_id, locale)
        return {
            "previous": before.model_dump() if before else None,
            "next": after.model_dump() if after else None,
        }

    @mcp.tool()
    async def grouped_pages(exclude: str | None = None) -> list[dict[str, str]]:
        """Every public page in hierarchy order, optionally without one subtree."""
        await db.ensure_ready()
        pages = await grouping.group_by_parent(exclude)
        return [{"id": p.id, "parent_id": p.parent_id, "title": p.title} for p in pages]

    return mcp
