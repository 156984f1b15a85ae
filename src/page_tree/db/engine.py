from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from page_tree.config import load_settings


def get_engine(db_url: str | None = None) -> AsyncEngine:
    if db_url is None:
        db_url = load_settings().database_url
    return create_async_engine(db_url, future=True)
