"""Boundary Protocols: contract between the service and storage.

Invariants:
    - Core NEVER imports from the shell; dependency arrows point inward only
    - list() and count() share one filter predicate for the same arguments
    - Every list-returning query is ordered by detected_date descending
    - insert() assigns id and raises ConflictError on a duplicate external_item_id
    - A cancelled or failed mutation leaves storage unchanged

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async methods: implementations do IO; cancellation is asyncio task cancellation
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from results_service.core.marketplace_item import MarketplaceItem


class MarketplaceItemRepository(Protocol):
    """Contract for marketplace item persistence, implemented by the shell."""

    async def get_by_id(self, item_id: int) -> MarketplaceItem | None: ...

    async def get_by_external_id(
        self, external_item_id: str,
    ) -> MarketplaceItem | None: ...

    async def list(
        self,
        platform_id: int | None = None,
        search_term: str | None = None,
        page_number: int = 1,
        page_size: int = 50,
    ) -> list[MarketplaceItem]: ...

    async def count(
        self, platform_id: int | None = None, search_term: str | None = None,
    ) -> int: ...

    async def insert(self, item: MarketplaceItem) -> MarketplaceItem: ...

    async def update(self, item: MarketplaceItem) -> MarketplaceItem: ...

    async def delete(self, item_id: int) -> bool: ...

    async def list_by_seller(self, seller_id: str) -> list[MarketplaceItem]: ...

    async def list_by_price_range(
        self, min_usd: Decimal | None = None, max_usd: Decimal | None = None,
    ) -> list[MarketplaceItem]: ...

    async def list_recently_detected(
        self, hours_ago: int = 24,
    ) -> list[MarketplaceItem]: ...
