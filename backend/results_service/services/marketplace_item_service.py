"""Marketplace Item Service: use cases over the item repository.

Invariants:
    - "Not found" is returned as None, never raised
    - create() rejects blank external_item_id/title with InvalidArgumentError and an
      existing external_item_id with DuplicateItemError, both before any write
    - create() applies an update group only when the payload carries a value for it
      (for the seller group: a seller_id or seller_name)
    - update() replaces all four update groups (missing fields clear them)
    - patch() touches only groups with at least one field present in the request;
      within such a group, fields not sent keep their stored value
    - Paging arguments are clamped before reaching storage

Design Decisions:
    - Stateless: one instance per request, bound to that request's repository
    - The duplicate check is an early, friendlier error; the unique constraint in
      storage stays authoritative for concurrent creators
    - Errors are not logged here; the global handlers log them once with their context
"""

import logging
from decimal import Decimal

from results_service.core.domain_types import (
    DEFAULT_PAGE_SIZE, DEFAULT_RECENT_HOURS, MAX_PAGE_SIZE,
)
from results_service.core.errors import (
    DuplicateItemError, ErrorContext, InvalidArgumentError,
)
from results_service.core.marketplace_item import MarketplaceItem
from results_service.core.repository_protocols import MarketplaceItemRepository
from results_service.schemas.marketplace_item import (
    CreateMarketplaceItemRequest,
    MarketplaceItemResponse,
    PagedItemsResponse,
    UpdateMarketplaceItemRequest,
)

logger = logging.getLogger(__name__)

PRICING_FIELDS = ("price_text", "price_usd")
SELLER_FIELDS = ("seller_id", "seller_name", "seller_url", "seller_location")
# Seller info is only recorded on create when the seller is identified
SELLER_KEY_FIELDS = ("seller_id", "seller_name")
MEDIA_FIELDS = ("item_image_url", "item_url")
QUANTITY_FIELDS = ("quantity_text", "quantity_number")


class MarketplaceItemService:
    """Create, read, update, delete and list marketplace items."""

    def __init__(self, repository: MarketplaceItemRepository):
        self._repository = repository

    # ─── Reads ──────────────────────────────────────────────────

    async def get_by_id(self, item_id: int) -> MarketplaceItemResponse | None:
        item = await self._repository.get_by_id(item_id)
        return to_response(item) if item else None

    async def get_by_external_id(
        self, external_item_id: str,
    ) -> MarketplaceItemResponse | None:
        item = await self._repository.get_by_external_id(external_item_id)
        return to_response(item) if item else None

    async def list_page(
        self,
        platform_id: int | None = None,
        search_term: str | None = None,
        page_number: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PagedItemsResponse:
        page_number, page_size = clamp_page(page_number, page_size)
        items = await self._repository.list(
            platform_id, search_term, page_number, page_size,
        )
        total_count = await self._repository.count(platform_id, search_term)
        logger.info(
            f"Listed {len(items)} of {total_count} items "
            f"(page {page_number}, size {page_size})",
            extra={"operation": "list_page"},
        )
        return PagedItemsResponse(
            items=[to_response(item) for item in items],
            total_count=total_count,
            page_number=page_number,
            page_size=page_size,
        )

    async def list_by_seller(self, seller_id: str) -> list[MarketplaceItemResponse]:
        items = await self._repository.list_by_seller(seller_id)
        return [to_response(item) for item in items]

    async def list_by_price_range(
        self, min_usd: Decimal | None = None, max_usd: Decimal | None = None,
    ) -> list[MarketplaceItemResponse]:
        items = await self._repository.list_by_price_range(min_usd, max_usd)
        return [to_response(item) for item in items]

    async def list_recently_detected(
        self, hours_ago: int = DEFAULT_RECENT_HOURS,
    ) -> list[MarketplaceItemResponse]:
        items = await self._repository.list_recently_detected(hours_ago)
        return [to_response(item) for item in items]

    # ─── Writes ─────────────────────────────────────────────────

    async def create(
        self, request: CreateMarketplaceItemRequest,
    ) -> MarketplaceItemResponse:
        context = ErrorContext(
            operation="create", external_item_id=request.external_item_id or None,
        )
        if _is_blank(request.external_item_id):
            raise InvalidArgumentError(
                "external_item_id is required", "external_item_id", context,
            )
        if _is_blank(request.title):
            raise InvalidArgumentError("title is required", "title", context)

        existing = await self._repository.get_by_external_id(request.external_item_id)
        if existing is not None:
            raise DuplicateItemError(request.external_item_id, context)

        item = MarketplaceItem.create(
            request.external_item_id,
            request.title,
            request.platform_id,
            request.detected_date,
            search_term=request.search_term,
            product_id=request.product_id,
        )
        if _has_any_value(request, MEDIA_FIELDS):
            item.update_media(request.item_image_url, request.item_url)
        if _has_any_value(request, PRICING_FIELDS):
            item.update_pricing(request.price_text, request.price_usd)
        if _has_any_value(request, QUANTITY_FIELDS):
            item.update_quantity(request.quantity_text, request.quantity_number)
        if _has_any_value(request, SELLER_KEY_FIELDS):
            item.update_seller_info(
                request.seller_id, request.seller_name,
                request.seller_url, request.seller_location,
            )

        saved = await self._repository.insert(item)
        logger.info(
            "Created marketplace item",
            extra={
                "operation": "create", "item_id": saved.id,
                "external_item_id": saved.external_item_id,
            },
        )
        return to_response(saved)

    async def update(
        self, item_id: int, request: UpdateMarketplaceItemRequest,
    ) -> MarketplaceItemResponse | None:
        """Full replacement of the four update groups."""
        item = await self._repository.get_by_id(item_id)
        if item is None:
            return None

        item.update_media(request.item_image_url, request.item_url)
        item.update_pricing(request.price_text, request.price_usd)
        item.update_quantity(request.quantity_text, request.quantity_number)
        item.update_seller_info(
            request.seller_id, request.seller_name,
            request.seller_url, request.seller_location,
        )

        saved = await self._repository.update(item)
        logger.info(
            "Updated marketplace item",
            extra={"operation": "update", "item_id": item_id},
        )
        return to_response(saved)

    async def patch(
        self, item_id: int, request: UpdateMarketplaceItemRequest,
    ) -> MarketplaceItemResponse | None:
        """Presence-aware update: only groups the caller sent are touched."""
        item = await self._repository.get_by_id(item_id)
        if item is None:
            return None

        sent = request.model_fields_set
        if sent & set(MEDIA_FIELDS):
            item.update_media(
                *(_sent_or_current(request, item, name) for name in MEDIA_FIELDS),
            )
        if sent & set(PRICING_FIELDS):
            item.update_pricing(
                *(_sent_or_current(request, item, name) for name in PRICING_FIELDS),
            )
        if sent & set(QUANTITY_FIELDS):
            item.update_quantity(
                *(_sent_or_current(request, item, name) for name in QUANTITY_FIELDS),
            )
        if sent & set(SELLER_FIELDS):
            item.update_seller_info(
                *(_sent_or_current(request, item, name) for name in SELLER_FIELDS),
            )

        saved = await self._repository.update(item)
        logger.info(
            f"Patched marketplace item fields: {sorted(sent)}",
            extra={"operation": "patch", "item_id": item_id},
        )
        return to_response(saved)

    async def delete(self, item_id: int) -> bool:
        deleted = await self._repository.delete(item_id)
        if deleted:
            logger.info(
                "Deleted marketplace item",
                extra={"operation": "delete", "item_id": item_id},
            )
        return deleted


# --- Helpers ------------------------------------------------------------------

def clamp_page(page_number: int, page_size: int) -> tuple[int, int]:
    """page_number below 1 becomes 1; page_size outside [1, MAX] becomes the default."""
    if page_number < 1:
        page_number = 1
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE
    return page_number, page_size


def to_response(item: MarketplaceItem) -> MarketplaceItemResponse:
    return MarketplaceItemResponse.model_validate(item)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _has_any_value(request: CreateMarketplaceItemRequest, fields: tuple[str, ...]) -> bool:
    for name in fields:
        value = getattr(request, name)
        if isinstance(value, str):
            if value.strip():
                return True
        elif value is not None:
            return True
    return False


def _sent_or_current(
    request: UpdateMarketplaceItemRequest, item: MarketplaceItem, name: str,
):
    if name in request.model_fields_set:
        return getattr(request, name)
    return getattr(item, name)
