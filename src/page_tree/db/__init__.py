from page_tree.db.memory import (
    InMemoryHierarchyDatabase,
    InMemoryOrderStore,
    InMemoryPageRepository,
)
from page_tree.db.postgres import (
    PostgresHierarchyDatabase,
    PostgresOrderStore,
    PostgresPageRepository,
    compile_filter,
)

__all__ = [
    "InMemoryHierarchyDatabase",
    "InMemoryOrderStore",
    "InMemoryPageRepository",
    "PostgresHierarchyDatabase",
    "PostgresOrderStore",
    "PostgresPageRepository",
    "compile_filter",
]
