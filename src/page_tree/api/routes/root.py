from __future__ import annotations

from typing import Any

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root discovery endpoint listing the API entry points."""
    return {
        "meta": {
            "title": "Page Tree API",
            "description": "Ordered page hierarchy with menu trees and previous/next navigation.",
            "version": "0.1.0",
        },
        "links": {
            "self": "/",
            "menu": "/menu",
            "flat": "/flat",
            "pages": "/pages",
            "grouped": "/pages/grouped",
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }
