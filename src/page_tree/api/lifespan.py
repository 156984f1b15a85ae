from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from page_tree.api.dependencies import get_settings, shutdown_database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger.info(
        "Serving locales %s with menu depth %d and navigation depth %d",
        ", ".join(settings.available_locales),
        settings.menu_depth,
        settings.max_menu_level,
    )
    yield
    await shutdown_database()
