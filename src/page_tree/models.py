from typing import Any

from pydantic import BaseModel, Field, field_validator

ROOT_ID = "0"


def is_equal_ids(first: Any, second: Any) -> bool:
    """Compare two store ids by their string form."""
    if first is None or second is None:
        return first is None and second is None
    return str(first) == str(second)


class PageNode(BaseModel):
    id: str = ""
    parent_id: str = ROOT_ID
    title: str = ""
    uri: str | None = None
    locale: str | None = None
    is_multi_locale: bool = False
    is_private: bool = False


class OrderRecord(BaseModel):
    parent_id: str
    order: list[str] = Field(default_factory=list)

    @field_validator("order")
    @classmethod
    def _dedupe(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(str(v) for v in value))


class FlatEntry(BaseModel):
    id: str
    parent_id: str
    root_id: str = ROOT_ID
    level: int
    title: str
    locale: str | None = None
    is_multi_locale: bool = False
    is_private: bool = False
    uri: str | None = None


class MenuNode(PageNode):
    children: list["MenuNode"] = Field(default_factory=list)


MenuNode.model_rebuild()  # necessary for recursive types
