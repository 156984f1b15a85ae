from __future__ import annotations

from fastapi import FastAPI

from page_tree.api.lifespan import lifespan
from page_tree.api.routes.health import router as health_router
from page_tree.api.routes.navigation import router as navigation_router
from page_tree.api.routes.pages import router as pages_router
from page_tree.api.routes.root import router as root_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Page Tree API",
        description="Ordered page hierarchy with menu trees and previous/next navigation.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(navigation_router)
    app.include_router(pages_router)

    return app
