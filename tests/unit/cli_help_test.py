"""Tests that -h is accepted everywhere and that tree commands render the hierarchy."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from page_tree.cli.app import app
from page_tree.db import InMemoryHierarchyDatabase
from page_tree.models import PageNode

runner = CliRunner()


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["db"],
        ["db", "migrate"],
        ["tree"],
        ["tree", "neighbors"],
        ["serve"],
    ],
    ids=["root", "db", "db-migrate", "tree", "tree-neighbors", "serve"],
)
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_tree_menu_prints_nested_titles(docs_db: InMemoryHierarchyDatabase) -> None:
    with patch("page_tree.cli.tree._get_database", return_value=docs_db):
        result = runner.invoke(app, ["tree", "menu", "--depth", "2"])

    assert result.exit_code == 0, result.output
    for title in ("P1", "P1A", "P1B", "P2"):
        assert title in result.output


def test_tree_menu_hides_private_pages(docs_db: InMemoryHierarchyDatabase) -> None:
    docs_db.pages.records["p2"] = PageNode(id="p2", title="Hidden Page", is_private=True)

    with patch("page_tree.cli.tree._get_database", return_value=docs_db):
        public = runner.invoke(app, ["tree", "menu"])
    with patch("page_tree.cli.tree._get_database", return_value=docs_db):
        private = runner.invoke(app, ["tree", "menu", "--authorized"])

    assert "Hidden Page" not in public.output
    assert "Hidden Page" in private.output


def test_tree_flat_lists_levels(docs_db: InMemoryHierarchyDatabase) -> None:
    with patch("page_tree.cli.tree._get_database", return_value=docs_db):
        result = runner.invoke(app, ["tree", "flat", "--locale", "en", "--nesting-limit", "1"])

    assert result.exit_code == 0, result.output
    assert "(2 rows)" in result.output


def test_tree_neighbors(docs_db: InMemoryHierarchyDatabase) -> None:
    with patch("page_tree.cli.tree._get_database", return_value=docs_db):
        result = runner.invoke(app, ["tree", "neighbors", "p1b", "--locale", "en"])

    assert result.exit_code == 0, result.output
    assert "p1a" in result.output
    assert "p2" in result.output


def test_tree_grouped_with_empty_root_order() -> None:
    mock_db = AsyncMock()
    mock_db.orders.find_one.return_value = None

    with patch("page_tree.cli.tree._get_database", return_value=mock_db):
        result = runner.invoke(app, ["tree", "grouped", "--exclude", "p1"])

    assert result.exit_code == 0, result.output
    assert "(0 rows)" in result.output
    mock_db.dispose.assert_awaited_once()


def test_tree_grouped_hides_private_pages(docs_db: InMemoryHierarchyDatabase) -> None:
    docs_db.pages.records["p2"] = PageNode(id="p2", title="Hidden Page", is_private=True)

    with patch("page_tree.cli.tree._get_database", return_value=docs_db):
        public = runner.invoke(app, ["tree", "grouped"])
    with patch("page_tree.cli.tree._get_database", return_value=docs_db):
        private = runner.invoke(app, ["tree", "grouped", "--authorized"])

    assert public.exit_code == 0, public.output
    assert "Hidden Page" not in public.output
    assert "Hidden Page" in private.output
