"""Marketplace Items Routes: HTTP surface over MarketplaceItemService.

Invariants:
    - Create/update/patch payloads pass core validation before the service is called
    - Service absences (None / False) become 404 ResourceNotFoundError
    - Fixed paths (/recent, /by-...) are declared before /{item_id}
    - Paging arguments are passed through unbounded: the service clamps them

Design Decisions:
    - PUT keeps full-replacement semantics of the four update groups; PATCH only touches
      groups whose fields are present in the body
    - POST answers 201 with a Location header pointing at the new item
"""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query, Response, status

from results_service.api.dependencies import get_item_service
from results_service.core.domain_types import DEFAULT_PAGE_SIZE, DEFAULT_RECENT_HOURS
from results_service.core.errors import (
    ErrorContext, ResourceNotFoundError, ValidationFailedError,
)
from results_service.core.validate_item import (
    validate_create_item,
    validate_hours_ago,
    validate_price_range,
    validate_update_item,
)
from results_service.schemas.marketplace_item import (
    CreateMarketplaceItemRequest,
    MarketplaceItemResponse,
    PagedItemsResponse,
    UpdateMarketplaceItemRequest,
)
from results_service.services.marketplace_item_service import MarketplaceItemService

router = APIRouter(prefix="/api/v1/marketplace-items", tags=["marketplace-items"])

RESOURCE = "MarketplaceItem"


@router.get("", response_model=PagedItemsResponse)
async def list_items(
    platform_id: int | None = None,
    search_term: str | None = None,
    page_number: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    service: MarketplaceItemService = Depends(get_item_service),
):
    """List items newest-detected first, optionally filtered by platform and search term."""
    return await service.list_page(platform_id, search_term, page_number, page_size)


@router.get("/recent", response_model=list[MarketplaceItemResponse])
async def list_recent_items(
    hours_ago: int = Query(DEFAULT_RECENT_HOURS),
    service: MarketplaceItemService = Depends(get_item_service),
):
    """Items detected within the last `hours_ago` hours."""
    _raise_on_violations(validate_hours_ago(hours_ago), "list_recently_detected")
    return await service.list_recently_detected(hours_ago)


@router.get("/by-price-range", response_model=list[MarketplaceItemResponse])
async def list_items_by_price_range(
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    service: MarketplaceItemService = Depends(get_item_service),
):
    _raise_on_violations(
        validate_price_range(min_price, max_price), "list_by_price_range",
    )
    return await service.list_by_price_range(min_price, max_price)


@router.get("/by-seller/{seller_id}", response_model=list[MarketplaceItemResponse])
async def list_items_by_seller(
    seller_id: str, service: MarketplaceItemService = Depends(get_item_service),
):
    return await service.list_by_seller(seller_id)


@router.get(
    "/by-external-id/{external_item_id}", response_model=MarketplaceItemResponse,
)
async def get_item_by_external_id(
    external_item_id: str, service: MarketplaceItemService = Depends(get_item_service),
):
    item = await service.get_by_external_id(external_item_id)
    if item is None:
        raise ResourceNotFoundError(
            RESOURCE, external_item_id,
            ErrorContext(operation="get_by_external_id", external_item_id=external_item_id),
        )
    return item


@router.get("/{item_id}", response_model=MarketplaceItemResponse)
async def get_item(
    item_id: int, service: MarketplaceItemService = Depends(get_item_service),
):
    item = await service.get_by_id(item_id)
    if item is None:
        raise _not_found(item_id, "get_by_id")
    return item


@router.post(
    "", response_model=MarketplaceItemResponse, status_code=status.HTTP_201_CREATED,
)
async def create_item(
    body: CreateMarketplaceItemRequest,
    response: Response,
    service: MarketplaceItemService = Depends(get_item_service),
):
    """Record a newly scraped item. 409 if the external id is already stored."""
    _raise_on_violations(
        validate_create_item(body.model_dump()), "create",
        external_item_id=body.external_item_id or None,
    )
    item = await service.create(body)
    response.headers["Location"] = f"{router.prefix}/{item.id}"
    return item


@router.put("/{item_id}", response_model=MarketplaceItemResponse)
async def replace_item_groups(
    item_id: int,
    body: UpdateMarketplaceItemRequest,
    service: MarketplaceItemService = Depends(get_item_service),
):
    """Replace pricing, seller, media and quantity groups; omitted fields are cleared."""
    _raise_on_violations(validate_update_item(body.model_dump()), "update", item_id=item_id)
    item = await service.update(item_id, body)
    if item is None:
        raise _not_found(item_id, "update")
    return item


@router.patch("/{item_id}", response_model=MarketplaceItemResponse)
async def patch_item_groups(
    item_id: int,
    body: UpdateMarketplaceItemRequest,
    service: MarketplaceItemService = Depends(get_item_service),
):
    """Update only the fields present in the body; explicit null clears a field."""
    _raise_on_violations(validate_update_item(body.model_dump()), "patch", item_id=item_id)
    item = await service.patch(item_id, body)
    if item is None:
        raise _not_found(item_id, "patch")
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: int, service: MarketplaceItemService = Depends(get_item_service),
):
    if not await service.delete(item_id):
        raise _not_found(item_id, "delete")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Helpers ------------------------------------------------------------------

def _raise_on_violations(violations, operation: str, **context) -> None:
    if violations:
        raise ValidationFailedError(
            violations, ErrorContext(operation=operation, **context),
        )


def _not_found(item_id: int, operation: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        RESOURCE, str(item_id), ErrorContext(operation=operation, item_id=item_id),
    )
