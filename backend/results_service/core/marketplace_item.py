"""MarketplaceItem Entity: one scraped observation of an item on a platform.

Invariants:
    - external_item_id and title are non-empty once the entity exists
    - id is assigned by storage; id and created_at never change afterwards
    - updated_at >= created_at, refreshed by every update group and by mark_updated
    - Update groups (pricing, seller info, media, quantity) are replaced whole:
      passing None clears a field, there is no per-field merge
    - Every datetime held here is timezone-aware UTC

Design Decisions:
    - Plain dataclass, not the ORM row: the storage adapter maps between the two,
      so core never imports SQLAlchemy
    - mark_created / mark_updated are explicit hooks called by the repository on
      insert / update instead of generic save-time stamping
    - search_term and product_id belong to no update group; they are fixed at create()
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from results_service.core.errors import InvalidArgumentError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(eq=False)
class MarketplaceItem:
    """Aggregate root for a marketplace observation."""

    external_item_id: str
    title: str
    platform_id: int
    detected_date: datetime
    id: int | None = None
    search_term: str | None = None
    product_id: str | None = None

    # quantity group
    quantity_text: str | None = None
    quantity_number: int | None = None

    # pricing group
    price_text: str | None = None
    price_usd: Decimal | None = None

    # seller group
    seller_id: str | None = None
    seller_name: str | None = None
    seller_url: str | None = None
    seller_location: str | None = None

    # media group
    item_image_url: str | None = None
    item_url: str | None = None

    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def create(
        cls,
        external_item_id: str,
        title: str,
        platform_id: int,
        detected_date: datetime | None = None,
        *,
        search_term: str | None = None,
        product_id: str | None = None,
    ) -> "MarketplaceItem":
        """Build a new, not yet persisted item."""
        if not external_item_id or not external_item_id.strip():
            raise InvalidArgumentError(
                "external_item_id is required", "external_item_id",
            )
        if not title or not title.strip():
            raise InvalidArgumentError("title is required", "title")
        now = utc_now()
        return cls(
            external_item_id=external_item_id,
            title=title,
            platform_id=platform_id,
            detected_date=as_utc(detected_date) if detected_date else now,
            search_term=search_term,
            product_id=product_id,
            created_at=now,
            updated_at=now,
        )

    # ─── Update groups ──────────────────────────────────────────

    def update_pricing(
        self, price_text: str | None, price_usd: Decimal | None,
    ) -> None:
        self.price_text = price_text
        self.price_usd = price_usd
        self._touch()

    def update_seller_info(
        self,
        seller_id: str | None,
        seller_name: str | None,
        seller_url: str | None,
        seller_location: str | None,
    ) -> None:
        self.seller_id = seller_id
        self.seller_name = seller_name
        self.seller_url = seller_url
        self.seller_location = seller_location
        self._touch()

    def update_media(
        self, item_image_url: str | None, item_url: str | None,
    ) -> None:
        self.item_image_url = item_image_url
        self.item_url = item_url
        self._touch()

    def update_quantity(
        self, quantity_text: str | None, quantity_number: int | None,
    ) -> None:
        self.quantity_text = quantity_text
        self.quantity_number = quantity_number
        self._touch()

    # ─── Persistence hooks ──────────────────────────────────────

    def mark_created(self, now: datetime | None = None) -> None:
        """Called by storage on insert: both timestamps take the same instant."""
        stamp = as_utc(now) if now else utc_now()
        self.created_at = stamp
        self.updated_at = stamp

    def mark_updated(self, now: datetime | None = None) -> None:
        """Called by storage on update."""
        self.updated_at = max(as_utc(now) if now else utc_now(), self.created_at)

    def _touch(self) -> None:
        self.updated_at = max(utc_now(), self.created_at)
