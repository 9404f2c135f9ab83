"""MarketplaceItem ORM: one row per scraped item observation.

Invariants:
    - id is an autoincrement integer primary key
    - external_item_id is unique (uq_marketplace_items_external_item_id) and non-null
    - Column sizes match the limits in core/domain_types.py
    - Indexes on external_item_id, platform_id, seller_id, detected_date back the
      lookup, filter and ordering patterns of the repository

Design Decisions:
    - NUMERIC(18, 2) for price_usd: exact cents, compared with Decimal bounds
    - Timestamps have no column defaults: the entity stamps them via its hooks
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    DateTime, Index, Integer, Numeric, String, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from results_service.core.domain_types import (
    MAX_EXTERNAL_ID_LENGTH,
    MAX_IDENTIFIER_LENGTH,
    MAX_PRICE_TEXT_LENGTH,
    MAX_QUANTITY_TEXT_LENGTH,
    MAX_SEARCH_TERM_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
)
from results_service.db.base import Base


class MarketplaceItemRow(Base):
    """Persisted marketplace item."""
    __tablename__ = "marketplace_items"
    __table_args__ = (
        UniqueConstraint(
            "external_item_id", name="uq_marketplace_items_external_item_id",
        ),
        Index("ix_marketplace_items_external_item_id", "external_item_id"),
        Index("ix_marketplace_items_platform_id", "platform_id"),
        Index("ix_marketplace_items_seller_id", "seller_id"),
        Index("ix_marketplace_items_detected_date", "detected_date"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    external_item_id: Mapped[str] = mapped_column(
        String(MAX_EXTERNAL_ID_LENGTH), nullable=False,
    )
    title: Mapped[str] = mapped_column(
        String(MAX_TITLE_LENGTH), nullable=False,
    )
    platform_id: Mapped[int] = mapped_column(Integer, nullable=False)
    search_term: Mapped[str | None] = mapped_column(
        String(MAX_SEARCH_TERM_LENGTH), nullable=True,
    )
    quantity_text: Mapped[str | None] = mapped_column(
        String(MAX_QUANTITY_TEXT_LENGTH), nullable=True,
    )
    quantity_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    price_text: Mapped[str | None] = mapped_column(
        String(MAX_PRICE_TEXT_LENGTH), nullable=True,
    )
    price_usd: Mapped[Decimal | None] = mapped_column(
        Numeric(18, 2), nullable=True,
    )
    product_id: Mapped[str | None] = mapped_column(
        String(MAX_IDENTIFIER_LENGTH), nullable=True,
    )
    seller_id: Mapped[str | None] = mapped_column(
        String(MAX_IDENTIFIER_LENGTH), nullable=True,
    )
    seller_name: Mapped[str | None] = mapped_column(
        String(MAX_IDENTIFIER_LENGTH), nullable=True,
    )
    seller_url: Mapped[str | None] = mapped_column(
        String(MAX_URL_LENGTH), nullable=True,
    )
    seller_location: Mapped[str | None] = mapped_column(
        String(MAX_IDENTIFIER_LENGTH), nullable=True,
    )
    item_image_url: Mapped[str | None] = mapped_column(
        String(MAX_URL_LENGTH), nullable=True,
    )
    item_url: Mapped[str | None] = mapped_column(
        String(MAX_URL_LENGTH), nullable=True,
    )
    detected_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
