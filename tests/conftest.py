"""Shared fixtures and helpers for tests."""

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from page_tree.db import InMemoryHierarchyDatabase
from page_tree.models import ROOT_ID, OrderRecord, PageNode

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Hierarchy seeding
# ---------------------------------------------------------------------------


def make_page(page_id: str, parent_id: str = ROOT_ID, **fields: object) -> PageNode:
    return PageNode.model_validate({"id": page_id, "parent_id": parent_id, "title": page_id.upper(), **fields})


def seed(
    db: InMemoryHierarchyDatabase,
    pages: Iterable[PageNode],
    orders: dict[str, list[str]],
) -> InMemoryHierarchyDatabase:
    """Write pages and order records straight into the in-memory stores."""
    for page in pages:
        db.pages.records[page.id] = page
    for parent_id, order in orders.items():
        db.orders.records[parent_id] = OrderRecord(parent_id=parent_id, order=order)
    return db


@pytest.fixture
def in_memory_db() -> InMemoryHierarchyDatabase:
    return InMemoryHierarchyDatabase()


@pytest.fixture
def docs_db(in_memory_db: InMemoryHierarchyDatabase) -> InMemoryHierarchyDatabase:
    """Root order [p1, p2]; p1 has children [p1a, p1b]; nothing private."""
    return seed(
        in_memory_db,
        [
            make_page("p1"),
            make_page("p2"),
            make_page("p1a", "p1"),
            make_page("p1b", "p1"),
        ],
        {ROOT_ID: ["p1", "p2"], "p1": ["p1a", "p1b"]},
    )


@pytest.fixture
def build_db() -> Callable[[Iterable[PageNode], dict[str, list[str]]], InMemoryHierarchyDatabase]:
    """Factory for a fresh in-memory database seeded with pages and orders."""

    def _build(pages: Iterable[PageNode], orders: dict[str, list[str]]) -> InMemoryHierarchyDatabase:
        return seed(InMemoryHierarchyDatabase(), pages, orders)

    return _build
