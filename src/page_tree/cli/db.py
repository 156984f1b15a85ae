"""Database schema commands."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer
from rich.console import Console

from page_tree.config import load_settings

db_app = typer.Typer(help="Manage the page database schema.")
console = Console()


@db_app.command("migrate")
def migrate(
    config: Annotated[str, typer.Option(help="Path to alembic.ini.")] = "alembic.ini",
    url: Annotated[str | None, typer.Option(help="Database URL (default: DATABASE_URL).")] = None,
) -> None:
    """Apply Alembic migrations up to head."""
    from page_tree.db.migrations import run_migrations

    db_url = url or load_settings().database_url
    console.print("Running migrations...")
    run_migrations(db_url, config)
    console.print("[green]Schema is up to date.[/green]")


@db_app.command("check")
def check() -> None:
    """Check that the database answers."""
    from page_tree.db.engine import get_engine
    from page_tree.db.postgres import PostgresHierarchyDatabase

    db = PostgresHierarchyDatabase(get_engine())

    async def _run() -> bool:
        try:
            return await db.ping()
        finally:
            await db.dispose()

    if asyncio.run(_run()):
        console.print("Database: [green]up[/green]")
    else:
        console.print("Database: [red]down[/red]")
        raise typer.Exit(1)
