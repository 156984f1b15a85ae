import uuid

from page_tree.core.filters import PageFilter
from page_tree.models import OrderRecord, PageNode


class InMemoryPageRepository:
    def __init__(self) -> None:
        self.records: dict[str, PageNode] = {}

    async def find_all(self, where: PageFilter | None = None) -> list[PageNode]:
        return [p.model_copy() for p in self.records.values() if where is None or where.matches(p)]

    async def find_one(self, page_id: str) -> PageNode | None:
        page = self.records.get(str(page_id))
        return page.model_copy() if page is not None else None

    async def save(self, page: PageNode) -> PageNode:
        page_id = page.id or uuid.uuid4().hex
        stored = page.model_copy(update={"id": page_id})
        self.records[page_id] = stored
        return stored.model_copy()

    async def update(self, page: PageNode) -> PageNode:
        if page.id not in self.records:
            raise KeyError(page.id)
        self.records[page.id] = page.model_copy()
        return page.model_copy()

    async def delete(self, page_id: str) -> None:
        self.records.pop(str(page_id), None)


class InMemoryOrderStore:
    def __init__(self) -> None:
        self.records: dict[str, OrderRecord] = {}

    async def find_one(self, parent_id: str) -> OrderRecord | None:
        record = self.records.get(str(parent_id))
        return record.model_copy(deep=True) if record is not None else None

    async def find_all(self) -> list[OrderRecord]:
        return [r.model_copy(deep=True) for r in self.records.values()]

    async def upsert(self, parent_id: str, order: list[str]) -> OrderRecord:
        record = OrderRecord(parent_id=str(parent_id), order=list(order))
        self.records[record.parent_id] = record
        return record.model_copy(deep=True)

    async def delete(self, parent_id: str) -> None:
        self.records.pop(str(parent_id), None)


class InMemoryHierarchyDatabase:
    def __init__(self) -> None:
        self._pages = InMemoryPageRepository()
        self._orders = InMemoryOrderStore()

    @property
    def pages(self) -> InMemoryPageRepository:
        return self._pages

    @property
    def orders(self) -> InMemoryOrderStore:
        return self._orders

    async def ensure_ready(self) -> None:
        pass

    async def ping(self) -> bool:
        return True

    async def dispose(self) -> None:
        pass
