from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from page_tree.api.dependencies import get_database, get_index, get_settings, navigation_locale, viewer_authorized
from page_tree.config import HierarchySettings
from page_tree.core.filters import visibility_filter
from page_tree.core.flat_index import HierarchyIndexCache
from page_tree.core.menu import build_menu_tree
from page_tree.core.ports.database import HierarchyDatabase
from page_tree.models import ROOT_ID, FlatEntry, MenuNode

router = APIRouter(tags=["navigation"])


@router.get("/menu", response_model=list[MenuNode])
async def menu(
    locale: str | None = Query(None),
    depth: int | None = Query(None, ge=1),
    db: HierarchyDatabase = Depends(get_database),
    settings: HierarchySettings = Depends(get_settings),
    authorized: bool = Depends(viewer_authorized),
) -> list[MenuNode]:
    """Nested sidebar menu, ``depth`` levels deep."""
    pages = await db.pages.find_all(visibility_filter(locale, authorized))
    orders = await db.orders.find_all()
    return build_menu_tree(ROOT_ID, pages, orders, authorized, max_level=depth or settings.menu_depth)


@router.get("/flat", response_model=list[FlatEntry])
async def flat(
    locale: str | None = Depends(navigation_locale),
    nesting_limit: int | None = Query(2, ge=0),
    index: HierarchyIndexCache = Depends(get_index),
    authorized: bool = Depends(viewer_authorized),
) -> list[FlatEntry]:
    """Flattened navigation sequence; ``nesting_limit=0`` disables the depth cut."""
    return await index.get(nesting_limit, locale, authorized)
