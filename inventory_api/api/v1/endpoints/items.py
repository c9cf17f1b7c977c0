"""
Item CRUD endpoints - RESTful resource (GET/POST/PUT/DELETE).
Challenge: Pagination, auth, validation, 404 handling.
Design: Thin controller; service layer holds business logic. Every route requires a token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from inventory_api.container import Container
from inventory_api.core.dependencies import CurrentClaims, ItemServiceDep, get_container
from inventory_api.core.exceptions import ValidationError
from inventory_api.schemas.item import ItemListResponse, ItemResponse, ItemWrite

router = APIRouter()


@router.get("", response_model=ItemListResponse, response_model_exclude_none=True)
async def list_items(
    svc: ItemServiceDep,
    claims: CurrentClaims,
    container: Annotated[Container, Depends(get_container)],
    response: Response,
    item_status: str = Query("", alias="status", pattern="^(ACTIVE|INACTIVE)?$"),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None),
):
    """List items with pagination. REST: GET /items?status=ACTIVE&page=1&limit=10."""
    settings = container.settings
    if limit is None:
        limit = settings.default_page_size
    elif not 1 <= limit <= settings.max_page_size:
        raise ValidationError(f"limit must be between 1 and {settings.max_page_size}")
    result = await svc.list(item_status, page, limit)
    response.headers["X-Total-Count"] = str(result.total)
    response.headers["X-Page"] = str(result.page)
    response.headers["X-Per-Page"] = str(result.limit)
    response.headers["X-Total-Pages"] = str(result.total_pages)
    return ItemListResponse(
        total_pages=result.total_pages,
        data=[ItemResponse.model_validate(i) for i in result.items],
    )


@router.get("/{item_id}", response_model=ItemResponse, response_model_exclude_none=True)
async def get_item(svc: ItemServiceDep, claims: CurrentClaims, item_id: int):
    return ItemResponse.model_validate(await svc.get_by_id(item_id))


@router.post(
    "",
    response_model=ItemResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_item(svc: ItemServiceDep, claims: CurrentClaims, data: ItemWrite):
    """Create item. Creator is the token subject; status is derived from stock."""
    item = await svc.create(data.to_entity(), acting_user_id=claims.user_id)
    return ItemResponse.model_validate(item)


@router.put("/{item_id}", response_model=ItemResponse, response_model_exclude_none=True)
async def update_item(svc: ItemServiceDep, claims: CurrentClaims, item_id: int, data: ItemWrite):
    """Full replace of code/title/description/price/stock."""
    item = await svc.update(item_id, data.to_entity(), acting_user_id=claims.user_id)
    return ItemResponse.model_validate(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(svc: ItemServiceDep, claims: CurrentClaims, item_id: int):
    """Hard delete."""
    await svc.delete(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
