class PageTreeError(Exception):
    """Base class for errors raised by the page mutation surface."""


class PageNotFoundError(PageTreeError, LookupError):
    def __init__(self, page_id: str) -> None:
        super().__init__(f"Page {page_id!r} does not exist")
        self.page_id = page_id


class HierarchyCycleError(PageTreeError):
    """Raised when a move would make a page its own ancestor."""

    def __init__(self, page_id: str, new_parent_id: str) -> None:
        super().__init__(f"Cannot move page {page_id!r} under its own descendant {new_parent_id!r}")
        self.page_id = page_id
        self.new_parent_id = new_parent_id


class InvalidPageError(PageTreeError, ValueError):
    pass
