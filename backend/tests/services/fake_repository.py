"""In-memory MarketplaceItemRepository: storage double for service tests.

Invariants:
    - Same observable contract as the SQLAlchemy adapter: ordering, shared filter
      predicate for list/count, timestamp hooks, DuplicateItemError on insert
    - Every call is appended to `calls` as (method_name, args) so tests can assert
      that nothing was written
    - Stores copies: callers never hold a reference to stored state
"""

import copy
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from results_service.core.errors import DuplicateItemError
from results_service.core.marketplace_item import MarketplaceItem, utc_now

MUTATIONS = {"insert", "update", "delete"}


class InMemoryMarketplaceItemRepository:
    def __init__(self):
        self.rows: dict[int, MarketplaceItem] = {}
        self.calls: list[tuple[str, tuple]] = []
        self._next_id = 1

    @property
    def mutations(self) -> list[str]:
        return [name for name, _ in self.calls if name in MUTATIONS]

    def seed(self, item: MarketplaceItem) -> MarketplaceItem:
        """Store directly, bypassing call recording."""
        item = copy.deepcopy(item)
        item.id = self._next_id
        self._next_id += 1
        self.rows[item.id] = item
        return copy.deepcopy(item)

    async def get_by_id(self, item_id):
        self.calls.append(("get_by_id", (item_id,)))
        row = self.rows.get(item_id)
        return copy.deepcopy(row) if row else None

    async def get_by_external_id(self, external_item_id):
        self.calls.append(("get_by_external_id", (external_item_id,)))
        for row in self.rows.values():
            if row.external_item_id == external_item_id:
                return copy.deepcopy(row)
        return None

    async def list(self, platform_id=None, search_term=None, page_number=1, page_size=50):
        self.calls.append(("list", (platform_id, search_term, page_number, page_size)))
        matching = self._newest_first(self._matching(platform_id, search_term))
        skip = (page_number - 1) * page_size
        return matching[skip:skip + page_size]

    async def count(self, platform_id=None, search_term=None):
        self.calls.append(("count", (platform_id, search_term)))
        return len(self._matching(platform_id, search_term))

    async def insert(self, item):
        self.calls.append(("insert", (item.external_item_id,)))
        if any(r.external_item_id == item.external_item_id for r in self.rows.values()):
            raise DuplicateItemError(item.external_item_id)
        item.mark_created()
        return self.seed(item)

    async def update(self, item):
        self.calls.append(("update", (item.id,)))
        item.mark_updated()
        self.rows[item.id] = copy.deepcopy(item)
        return copy.deepcopy(item)

    async def delete(self, item_id):
        self.calls.append(("delete", (item_id,)))
        return self.rows.pop(item_id, None) is not None

    async def list_by_seller(self, seller_id):
        self.calls.append(("list_by_seller", (seller_id,)))
        return self._newest_first(
            [r for r in self.rows.values() if r.seller_id == seller_id],
        )

    async def list_by_price_range(self, min_usd: Decimal | None = None, max_usd: Decimal | None = None):
        self.calls.append(("list_by_price_range", (min_usd, max_usd)))
        rows = list(self.rows.values())
        if min_usd is not None:
            rows = [r for r in rows if r.price_usd is not None and r.price_usd >= min_usd]
        if max_usd is not None:
            rows = [r for r in rows if r.price_usd is not None and r.price_usd <= max_usd]
        return self._newest_first(rows)

    async def list_recently_detected(self, hours_ago=24):
        self.calls.append(("list_recently_detected", (hours_ago,)))
        try:
            cutoff = utc_now() - timedelta(hours=hours_ago)
        except OverflowError:
            cutoff = datetime.min.replace(tzinfo=timezone.utc)
        return self._newest_first(
            [r for r in self.rows.values() if r.detected_date >= cutoff],
        )

    def _matching(self, platform_id, search_term):
        rows = list(self.rows.values())
        if platform_id is not None:
            rows = [r for r in rows if r.platform_id == platform_id]
        if search_term and search_term.strip():
            rows = [r for r in rows if r.search_term and search_term in r.search_term]
        return rows

    @staticmethod
    def _newest_first(rows):
        ordered = sorted(rows, key=lambda r: (r.detected_date, r.id), reverse=True)
        return [copy.deepcopy(r) for r in ordered]
