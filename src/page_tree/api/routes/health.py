from fastapi import APIRouter, Depends, Response, status

from page_tree.api.dependencies import get_database, get_settings
from page_tree.api.schemas import HealthResponse, ReadinessResponse
from page_tree.config import HierarchySettings
from page_tree.core.ports.database import HierarchyDatabase

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
@router.get("/healthz/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe: is the process alive?"""
    return HealthResponse()


@router.get("/healthz/ready", response_model=ReadinessResponse)
async def readiness(
    response: Response,
    db: HierarchyDatabase = Depends(get_database),
    settings: HierarchySettings = Depends(get_settings),
) -> ReadinessResponse:
    """Readiness probe: can the page store be reached?"""
    if await db.ping():
        return ReadinessResponse(locales=settings.available_locales)
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status="degraded", database="down", locales=settings.available_locales)
