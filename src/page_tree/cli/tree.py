import asyncio
from collections.abc import Sequence
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from page_tree.config import load_settings
from page_tree.core.filters import visibility_filter
from page_tree.core.flat_index import HierarchyIndexCache
from page_tree.core.grouping import PageGroupingService
from page_tree.core.menu import build_menu_tree
from page_tree.core.ordering import OrderingService
from page_tree.core.ports.database import HierarchyDatabase
from page_tree.models import ROOT_ID, FlatEntry, MenuNode

tree_app = typer.Typer(help="Inspect the page hierarchy.")
console = Console()

LocaleOption = Annotated[str | None, typer.Option(help="Restrict to pages visible in this locale.")]
AuthorizedOption = Annotated[bool, typer.Option("--authorized/--public", help="Include private pages.")]


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def _add_branch(parent: Tree, nodes: Sequence[MenuNode]) -> None:
    for node in nodes:
        label = f"{node.title} [dim]{node.id}[/dim]"
        if node.is_private:
            label += " [yellow](private)[/yellow]"
        _add_branch(parent.add(label), node.children)


def _get_database() -> HierarchyDatabase:
    from page_tree.db.engine import get_engine
    from page_tree.db.postgres import PostgresHierarchyDatabase

    return PostgresHierarchyDatabase(get_engine())


def _get_index(db: HierarchyDatabase) -> HierarchyIndexCache:
    settings = load_settings()
    return HierarchyIndexCache(
        db,
        available_locales=settings.available_locales,
        max_menu_level=settings.max_menu_level,
        ttl=settings.cache_ttl,
    )


def _flat_rows(entries: Sequence[FlatEntry]) -> list[tuple[Any, ...]]:
    return [(e.id, e.level, "  " * e.level + e.title, e.locale or "", e.uri or "") for e in entries]


@tree_app.command("menu")
def menu(
    depth: Annotated[int | None, typer.Option(min=1, help="Menu depth (default from settings).")] = None,
    locale: LocaleOption = None,
    authorized: AuthorizedOption = False,
) -> None:
    """Print the nested navigation menu."""
    db = _get_database()
    max_level = depth or load_settings().menu_depth

    async def _run() -> None:
        try:
            await db.ensure_ready()
            pages = await db.pages.find_all(visibility_filter(locale, authorized))
            orders = await db.orders.find_all()
            root = Tree("[bold]menu[/bold]")
            _add_branch(root, build_menu_tree(ROOT_ID, pages, orders, authorized, max_level=max_level))
            console.print(root)
        finally:
            await db.dispose()

    asyncio.run(_run())


@tree_app.command("flat")
def flat(
    nesting_limit: Annotated[int, typer.Option(min=0, help="Keep levels below this; 0 keeps all.")] = 2,
    locale: LocaleOption = None,
    authorized: AuthorizedOption = False,
) -> None:
    """Print the flattened navigation sequence."""
    db = _get_database()

    async def _run() -> None:
        try:
            await db.ensure_ready()
            entries = await _get_index(db).get(nesting_limit, locale, authorized)
            _render_table(["id", "level", "title", "locale", "uri"], _flat_rows(entries))
        finally:
            await db.dispose()

    asyncio.run(_run())


@tree_app.command("neighbors")
def neighbors(
    page_id: Annotated[str, typer.Argument(help="Page id.")],
    locale: LocaleOption = None,
    authorized: AuthorizedOption = False,
) -> None:
    """Show the previous and next page of a page."""
    db = _get_database()

    async def _run() -> None:
        try:
            await db.ensure_ready()
            index = _get_index(db)
            before = await index.get_page_before(page_id, locale, authorized)
            after = await index.get_page_after(page_id, locale, authorized)
            rows = [
                ("previous", before.id if before else "-", before.title if before else "-"),
                ("next", after.id if after else "-", after.title if after else "-"),
            ]
            _render_table(["direction", "id", "title"], rows)
        finally:
            await db.dispose()

    asyncio.run(_run())


@tree_app.command("grouped")
def grouped(
    exclude: Annotated[str | None, typer.Option(help="Leave out this page and its subtree.")] = None,
    authorized: AuthorizedOption = False,
) -> None:
    """List every page grouped under its root ancestor."""
    db = _get_database()

    async def _run() -> None:
        try:
            await db.ensure_ready()
            service = PageGroupingService(db.pages, OrderingService(db))
            pages = await service.group_by_parent(exclude, authorized)
            _render_table(["id", "parent_id", "title"], [(p.id, p.parent_id, p.title) for p in pages])
        finally:
            await db.dispose()

    asyncio.run(_run())
