from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from page_tree.api.dependencies import (
    get_grouping,
    get_index,
    get_ordering,
    get_page_service,
    navigation_locale,
    require_editor,
    viewer_authorized,
)
from page_tree.api.schemas import (
    NeighborsResponse,
    PageCreateRequest,
    PageMoveRequest,
    PageUpdateRequest,
)
from page_tree.core.errors import HierarchyCycleError, InvalidPageError, PageNotFoundError
from page_tree.core.flat_index import HierarchyIndexCache
from page_tree.core.grouping import PageGroupingService
from page_tree.core.ordering import OrderingService
from page_tree.core.pages import PageService
from page_tree.models import PageNode

router = APIRouter(prefix="/pages", tags=["pages"])


@router.get("", response_model=list[PageNode])
async def list_pages(
    locale: str | None = Query(None),
    ids: list[str] | None = Query(None, description="Always include these pages, whatever their locale."),
    service: PageService = Depends(get_page_service),
    authorized: bool = Depends(viewer_authorized),
) -> list[PageNode]:
    return await service.get_all_pages(locale, ids or (), authorized)


@router.get("/grouped", response_model=list[PageNode], dependencies=[Depends(require_editor)])
async def grouped(
    exclude: str | None = Query(None, description="Leave out this page and its subtree."),
    grouping: PageGroupingService = Depends(get_grouping),
) -> list[PageNode]:
    return await grouping.group_by_parent(exclude, authorized=True)


@router.get("/{page_id}", response_model=PageNode)
async def get_page(
    page_id: str,
    service: PageService = Depends(get_page_service),
    authorized: bool = Depends(viewer_authorized),
) -> PageNode:
    try:
        return await service.get(page_id, authorized)
    except PageNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("/{page_id}/neighbors", response_model=NeighborsResponse)
async def neighbors(
    page_id: str,
    locale: str | None = Depends(navigation_locale),
    index: HierarchyIndexCache = Depends(get_index),
    authorized: bool = Depends(viewer_authorized),
) -> NeighborsResponse:
    """Previous and next pages in navigation order; ``null`` when there is none."""
    return NeighborsResponse(
        previous=await index.get_page_before(page_id, locale, authorized),
        next=await index.get_page_after(page_id, locale, authorized),
    )


@router.get("/{page_id}/siblings", response_model=list[PageNode], dependencies=[Depends(require_editor)])
async def siblings(
    page_id: str,
    locale: str | None = Query(None),
    exclude_self: bool = Query(True),
    service: PageService = Depends(get_page_service),
    ordering: OrderingService = Depends(get_ordering),
    grouping: PageGroupingService = Depends(get_grouping),
) -> list[PageNode]:
    try:
        page = await service.get(page_id, authorized=True)
    except PageNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    candidates = await grouping.get_all_except_children(page.id, locale, authorized=True)
    return await ordering.get_ordered_children(candidates, page.id, page.parent_id, exclude_self, locale)


@router.get("/{page_id}/parent-candidates", response_model=list[PageNode], dependencies=[Depends(require_editor)])
async def parent_candidates(
    page_id: str,
    locale: str | None = Query(None),
    grouping: PageGroupingService = Depends(get_grouping),
) -> list[PageNode]:
    """Pages that ``page_id`` may be moved under."""
    return await grouping.get_all_except_children(page_id, locale, authorized=True)


@router.post(
    "",
    response_model=PageNode,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_editor)],
)
async def create_page(
    body: PageCreateRequest,
    service: PageService = Depends(get_page_service),
) -> PageNode:
    try:
        return await service.create(body.to_page())
    except PageNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidPageError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.patch("/{page_id}", response_model=PageNode, dependencies=[Depends(require_editor)])
async def update_page(
    page_id: str,
    body: PageUpdateRequest,
    service: PageService = Depends(get_page_service),
) -> PageNode:
    try:
        return await service.update(page_id, **body.model_dump(exclude_unset=True))
    except PageNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidPageError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/{page_id}/move", response_model=PageNode, dependencies=[Depends(require_editor)])
async def move_page(
    page_id: str,
    body: PageMoveRequest,
    service: PageService = Depends(get_page_service),
) -> PageNode:
    try:
        return await service.move(page_id, body.parent_id, body.before_id)
    except PageNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except HierarchyCycleError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.delete(
    "/{page_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_editor)],
)
async def delete_page(
    page_id: str,
    service: PageService = Depends(get_page_service),
) -> Response:
    try:
        await service.delete(page_id)
    except PageNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
