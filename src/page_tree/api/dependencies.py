from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Query, status

from page_tree.config import HierarchySettings, load_settings
from page_tree.core.flat_index import HierarchyIndexCache
from page_tree.core.grouping import PageGroupingService
from page_tree.core.ordering import OrderingService
from page_tree.core.pages import PageService
from page_tree.core.ports.database import HierarchyDatabase
from page_tree.db.engine import get_engine
from page_tree.db.postgres import PostgresHierarchyDatabase

_db: PostgresHierarchyDatabase | None = None
_settings: HierarchySettings | None = None
# One index per database so every request shares the cached views.
_index: tuple[HierarchyDatabase, HierarchyIndexCache] | None = None


def get_settings() -> HierarchySettings:
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = load_settings()
    return _settings


async def get_database() -> AsyncIterator[HierarchyDatabase]:
    """Yield a ``HierarchyDatabase`` instance, creating it lazily on first call."""
    global _db  # noqa: PLW0603
    if _db is None:
        _db = PostgresHierarchyDatabase(get_engine(get_settings().database_url))
    yield _db


def get_index(
    db: Annotated[HierarchyDatabase, Depends(get_database)],
    settings: Annotated[HierarchySettings, Depends(get_settings)],
) -> HierarchyIndexCache:
    global _index  # noqa: PLW0603
    if _index is None or _index[0] is not db:
        index = HierarchyIndexCache(
            db,
            available_locales=settings.available_locales,
            max_menu_level=settings.max_menu_level,
            ttl=settings.cache_ttl,
        )
        _index = (db, index)
    return _index[1]


def get_ordering(db: Annotated[HierarchyDatabase, Depends(get_database)]) -> OrderingService:
    return OrderingService(db)


def get_grouping(
    db: Annotated[HierarchyDatabase, Depends(get_database)],
    ordering: Annotated[OrderingService, Depends(get_ordering)],
) -> PageGroupingService:
    return PageGroupingService(db.pages, ordering)


def get_page_service(
    db: Annotated[HierarchyDatabase, Depends(get_database)],
    ordering: Annotated[OrderingService, Depends(get_ordering)],
    index: Annotated[HierarchyIndexCache, Depends(get_index)],
) -> PageService:
    return PageService(db, ordering, index)


def viewer_authorized(
    x_viewer_authorized: Annotated[str | None, Header()] = None,
) -> bool:
    """Authorization decided upstream and forwarded in ``X-Viewer-Authorized``."""
    return (x_viewer_authorized or "").strip().lower() in {"1", "true", "yes"}


async def shutdown_database() -> None:
    global _db, _index  # noqa: PLW0603
    if _db is not None:
        await _db.dispose()
        _db = None
    _index = None


def require_editor(authorized: Annotated[bool, Depends(viewer_authorized)]) -> None:
    """Editing and parent-picker routes are for authorized viewers only."""
    if not authorized:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Editing requires an authorized viewer")


def navigation_locale(
    settings: Annotated[HierarchySettings, Depends(get_settings)],
    locale: Annotated[str | None, Query()] = None,
) -> str | None:
    """Locale of a flattened view; required once several locales are configured."""
    if not locale and len(settings.available_locales) > 1:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"locale is required, one of: {', '.join(settings.available_locales)}",
        )
    return locale or None
