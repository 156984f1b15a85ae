from __future__ import annotations

from collections.abc import Sequence

from page_tree.models import MenuNode, OrderRecord, PageNode, is_equal_ids


def _branch(parent_id: str, pages: Sequence[PageNode], orders: Sequence[OrderRecord]) -> list[PageNode]:
    """Children of ``parent_id``: ordered ones first, then the unordered rest."""
    record = next((o for o in orders if is_equal_ids(o.parent_id, parent_id)), None)
    by_id = {str(p.id): p for p in pages}

    ordered: list[PageNode] = []
    if record is not None:
        # Stale ids in the order record have no page and are dropped.
        ordered = [by_id[str(i)] for i in record.order if str(i) in by_id]
    unordered = [p for p in pages if is_equal_ids(p.parent_id, parent_id)]

    branch: dict[str, PageNode] = {}
    for page in [*ordered, *unordered]:
        if page.id and str(page.id) not in branch:
            branch[str(page.id)] = page
    return list(branch.values())


def build_menu_tree(
    parent_id: str,
    pages: Sequence[PageNode],
    orders: Sequence[OrderRecord],
    authorized: bool = False,
    max_level: int = 1,
    current_level: int = 1,
) -> list[MenuNode]:
    """Build the nested menu below ``parent_id``.

    Nodes at depth ``max_level`` are still returned but always with empty
    ``children``. Private pages are dropped, together with their subtree,
    unless ``authorized``.
    """
    if current_level > max_level:
        return []

    return [
        MenuNode(
            **page.model_dump(),
            children=build_menu_tree(page.id, pages, orders, authorized, max_level, current_level + 1),
        )
        for page in _branch(parent_id, pages, orders)
        if authorized or not page.is_private
    ]
