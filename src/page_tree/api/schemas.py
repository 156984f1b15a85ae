from __future__ import annotations

from pydantic import BaseModel, Field

from page_tree.models import ROOT_ID, FlatEntry, PageNode


class HealthResponse(BaseModel):
    status: str = "ok"


class ReadinessResponse(BaseModel):
    status: str = "ok"
    database: str = "up"
    locales: list[str] = Field(default_factory=list)


class NeighborsResponse(BaseModel):
    previous: FlatEntry | None = None
    next: FlatEntry | None = None


class PageCreateRequest(BaseModel):
    """POST /pages body."""

    title: str
    parent_id: str = ROOT_ID
    uri: str | None = None
    locale: str | None = None
    is_multi_locale: bool = False
    is_private: bool = False

    def to_page(self) -> PageNode:
        return PageNode(**self.model_dump())


class PageUpdateRequest(BaseModel):
    """PATCH /pages/{id} body; only fields sent are changed, and only ``uri``/``locale`` may be null."""

    title: str = ""
    uri: str | None = None
    locale: str | None = None
    is_multi_locale: bool = False
    is_private: bool = False


class PageMoveRequest(BaseModel):
    parent_id: str = ROOT_ID
    before_id: str | None = None
