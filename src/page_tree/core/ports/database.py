from typing import Protocol

from page_tree.core.filters import PageFilter
from page_tree.models import OrderRecord, PageNode


class PageRepository(Protocol):
    async def find_all(self, where: PageFilter | None = None) -> list[PageNode]: ...

    async def find_one(self, page_id: str) -> PageNode | None: ...

    async def save(self, page: PageNode) -> PageNode: ...

    async def update(self, page: PageNode) -> PageNode: ...

    async def delete(self, page_id: str) -> None: ...


class OrderStore(Protocol):
    async def find_one(self, parent_id: str) -> OrderRecord | None: ...

    async def find_all(self) -> list[OrderRecord]: ...

    async def upsert(self, parent_id: str, order: list[str]) -> OrderRecord: ...

    async def delete(self, parent_id: str) -> None: ...


class HierarchyDatabase(Protocol):
    @property
    def pages(self) -> PageRepository: ...

    @property
    def orders(self) -> OrderStore: ...

    async def ensure_ready(self) -> None: ...

    async def ping(self) -> bool: ...

    async def dispose(self) -> None: ...
