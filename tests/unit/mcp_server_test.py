"""Tests for the MCP server tool definitions."""

from __future__ import annotations

import inspect
from typing import Any

import pytest

from page_tree.config import HierarchySettings
from page_tree.db.memory import InMemoryHierarchyDatabase
from page_tree.mcp.server import create_mcp_server
from page_tree.models import PageNode


def _tool_fn(server: Any, name: str) -> Any:
    return server._tool_manager._tools[name].fn


class TestMcpServerCreation:
    def test_creates_server(self) -> None:
        server = create_mcp_server(InMemoryHierarchyDatabase())
        assert server is not None
        assert server.name == "page-tree"

    def test_server_has_tools(self) -> None:
        server = create_mcp_server(InMemoryHierarchyDatabase())
        tool_names = {t.name for t in server._tool_manager._tools.values()}
        assert {"menu", "flat", "neighbors", "grouped_pages"} <= tool_names

    def test_flat_tool_defaults_to_two_levels(self) -> None:
        server = create_mcp_server(InMemoryHierarchyDatabase())
        sig = inspect.signature(_tool_fn(server, "flat"))
        assert sig.parameters["nesting_limit"].default == 2


class TestMcpTools:
    @pytest.fixture
    def server(self, docs_db: InMemoryHierarchyDatabase) -> Any:
        return create_mcp_server(docs_db, HierarchySettings(available_locales=["en"]))

    @pytest.mark.asyncio
    async def test_menu(self, server: Any) -> None:
        tree = await _tool_fn(server, "menu")()
        assert [n["id"] for n in tree] == ["p1", "p2"]
        assert [n["id"] for n in tree[0]["children"]] == ["p1a", "p1b"]

    @pytest.mark.asyncio
    async def test_flat(self, server: Any) -> None:
        entries = await _tool_fn(server, "flat")(nesting_limit=1)
        assert [e["id"] for e in entries] == ["p1", "p2"]

    @pytest.mark.asyncio
    async def test_neighbors(self, server: Any) -> None:
        result = await _tool_fn(server, "neighbors")("p1b")
        assert result["previous"]["id"] == "p1a"
        assert result["next"]["id"] == "p2"

    @pytest.mark.asyncio
    async def test_grouped_pages(self, server: Any) -> None:
        result = await _tool_fn(server, "grouped_pages")(exclude="p1a")
        assert [p["id"] for p in result] == ["p1", "p1b", "p2"]

    @pytest.mark.asyncio
    async def test_grouped_pages_skips_private(self, docs_db: InMemoryHierarchyDatabase, server: Any) -> None:
        docs_db.pages.records["p2"] = PageNode(id="p2", title="Secret", is_private=True)

        result = await _tool_fn(server, "grouped_pages")()

        assert [p["id"] for p in result] == ["p1", "p1a", "p1b"]
