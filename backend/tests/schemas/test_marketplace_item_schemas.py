"""Marketplace Item Schemas: paging metadata and update presence tracking.

Tests:
    - total_pages / has_previous_page / has_next_page derived from counts
    - UpdateMarketplaceItemRequest records which fields were sent
    - Responses build from entity attributes
"""

from decimal import Decimal

from results_service.core.marketplace_item import MarketplaceItem
from results_service.schemas.marketplace_item import (
    CreateMarketplaceItemRequest,
    MarketplaceItemResponse,
    PagedItemsResponse,
    UpdateMarketplaceItemRequest,
)


def _page(total_count, page_number, page_size=10):
    return PagedItemsResponse(
        items=[], total_count=total_count,
        page_number=page_number, page_size=page_size,
    )


def test_paging_first_of_several_pages():
    page = _page(25, 1)
    assert page.total_pages == 3
    assert not page.has_previous_page
    assert page.has_next_page


def test_paging_last_page():
    page = _page(25, 3)
    assert page.has_previous_page
    assert not page.has_next_page


def test_paging_empty_result():
    page = _page(0, 1)
    assert page.total_pages == 0
    assert not page.has_next_page


def test_paging_fields_serialized():
    dumped = _page(11, 1).model_dump()
    assert dumped["total_pages"] == 2
    assert dumped["has_next_page"] is True


def test_update_request_tracks_sent_fields():
    body = UpdateMarketplaceItemRequest.model_validate(
        {"price_usd": "3.50", "seller_name": None},
    )
    assert body.model_fields_set == {"price_usd", "seller_name"}
    assert body.price_usd == Decimal("3.50")


def test_create_request_defaults_required_fields_to_empty():
    body = CreateMarketplaceItemRequest()
    assert body.external_item_id == ""
    assert body.title == ""
    assert body.platform_id == 0


def test_response_from_entity():
    item = MarketplaceItem.create("ml-1", "Lamp", 2, search_term="lamp")
    item.id = 5
    response = MarketplaceItemResponse.model_validate(item)
    assert response.id == 5
    assert response.search_term == "lamp"
    assert response.created_at == item.created_at
