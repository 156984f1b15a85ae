import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.")
console = Console()


@serve_app.command("api")
def api(
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Start the FastAPI REST API server."""
    import uvicorn

    from page_tree.api.app import create_app

    app = create_app()
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port)


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
) -> None:
    """Start the MCP server."""
    from page_tree.config import load_settings
    from page_tree.db.engine import get_engine
    from page_tree.db.postgres import PostgresHierarchyDatabase
    from page_tree.mcp.server import create_mcp_server

    settings = load_settings()
    db = PostgresHierarchyDatabase(get_engine(settings.database_url))
    server = create_mcp_server(db, settings)
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    server.run(transport=transport)  # type: ignore[arg-type]
