from typing import Annotated

import typer

from page_tree.cli.db import db_app
from page_tree.cli.serve import serve_app
from page_tree.cli.tree import tree_app
from page_tree.config import configure_logging, load_settings

app = typer.Typer(
    name="page-tree",
    help="Page Tree CLI: inspect and serve an ordered page hierarchy.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _root(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Logging level (default: PAGE_TREE_LOG_LEVEL or WARNING).")
    ] = None,
) -> None:
    configure_logging(log_level or load_settings().log_level)


app.add_typer(db_app, name="db")
app.add_typer(tree_app, name="tree")
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
