"""Marketplace Item Schemas: request and response models for the items API.

Invariants:
    - Create request defaults the required fields to empty/zero so missing values are
      reported by validate_create_item() together with every other violation
    - Update request fields are all optional; model_fields_set tells which ones the
      caller actually sent (used by PATCH)
    - MarketplaceItemResponse carries every entity attribute, same names

Design Decisions:
    - snake_case JSON fields, matching the Python attribute names
    - price_usd stays Decimal in Python; JSON output renders it as a number
"""

from datetime import datetime
from decimal import Decimal
from math import ceil
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer, computed_field

# JSON number; exact for amounts below 10^13
PriceUsd = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json"),
]


# --- Requests -----------------------------------------------------------------

class CreateMarketplaceItemRequest(BaseModel):
    """Payload posted by the scraper for a newly observed item."""
    external_item_id: str = ""
    title: str = ""
    platform_id: int = 0
    search_term: str | None = None
    product_id: str | None = None
    quantity_text: str | None = None
    quantity_number: int | None = None
    price_text: str | None = None
    price_usd: Decimal | None = None
    seller_id: str | None = None
    seller_name: str | None = None
    seller_url: str | None = None
    seller_location: str | None = None
    item_image_url: str | None = None
    item_url: str | None = None
    detected_date: datetime | None = None


class UpdateMarketplaceItemRequest(BaseModel):
    """Replacement values for the four update groups."""
    quantity_text: str | None = None
    quantity_number: int | None = None
    price_text: str | None = None
    price_usd: Decimal | None = None
    seller_id: str | None = None
    seller_name: str | None = None
    seller_url: str | None = None
    seller_location: str | None = None
    item_image_url: str | None = None
    item_url: str | None = None


# --- Responses ----------------------------------------------------------------

class MarketplaceItemResponse(BaseModel):
    """Public view of a stored item."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    external_item_id: str
    title: str
    platform_id: int
    search_term: str | None = None
    product_id: str | None = None
    quantity_text: str | None = None
    quantity_number: int | None = None
    price_text: str | None = None
    price_usd: PriceUsd | None = None
    seller_id: str | None = None
    seller_name: str | None = None
    seller_url: str | None = None
    seller_location: str | None = None
    item_image_url: str | None = None
    item_url: str | None = None
    detected_date: datetime
    created_at: datetime
    updated_at: datetime


class PagedItemsResponse(BaseModel):
    """One page of items plus the total matching the same filters."""
    items: list[MarketplaceItemResponse]
    total_count: int
    page_number: int
    page_size: int

    @computed_field
    @property
    def total_pages(self) -> int:
        return ceil(self.total_count / self.page_size) if self.page_size else 0

    @computed_field
    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @computed_field
    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages


class SegmentResponse(BaseModel):
    id: int
    name: str
    description: str
    supports_real_time_monitoring: bool
