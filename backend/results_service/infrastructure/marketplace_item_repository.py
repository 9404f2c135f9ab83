"""SQLAlchemy MarketplaceItem Repository: relational adapter for the storage contract.

Invariants:
    - Implements core.repository_protocols.MarketplaceItemRepository
    - list() and count() build their WHERE clause with the same _apply_filters()
    - Ordering is detected_date DESC, id DESC (stable pages for equal dates)
    - Each mutation is one transaction: commit at the end, rollback on timeout,
      cancellation or constraint failure
    - insert() stamps both timestamps (mark_created); update() stamps updated_at only
    - The unique constraint on external_item_id is the authoritative duplicate guard;
      its violation surfaces as DuplicateItemError

Design Decisions:
    - Repository bound to one AsyncSession (one per request), no caching
    - search_term filter is a LIKE containment with autoescape: % and _ match literally;
      case sensitivity follows the database collation for list and count alike
    - Optional per-operation timeout via asyncio.timeout; None disables it
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from results_service.core.errors import (
    DatabaseError,
    DuplicateItemError,
    ErrorContext,
    ResourceNotFoundError,
    StorageTimeoutError,
)
from results_service.core.marketplace_item import MarketplaceItem, as_utc, utc_now
from results_service.models.marketplace_item import MarketplaceItemRow

logger = logging.getLogger(__name__)

# Largest OFFSET the drivers can bind (signed 64-bit)
_MAX_OFFSET = 2 ** 63 - 1
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)

# Columns rewritten by update(); id and created_at are immutable
_MUTABLE_COLUMNS = (
    "external_item_id", "title", "platform_id", "search_term",
    "quantity_text", "quantity_number", "price_text", "price_usd",
    "product_id", "seller_id", "seller_name", "seller_url", "seller_location",
    "item_image_url", "item_url", "detected_date", "updated_at",
)


class SqlAlchemyMarketplaceItemRepository:
    """Marketplace item persistence over an AsyncSession."""

    def __init__(
        self, session: AsyncSession, timeout_seconds: float | None = None,
    ):
        self._session = session
        self._timeout_seconds = timeout_seconds

    # ─── Lookups ────────────────────────────────────────────────

    async def get_by_id(self, item_id: int) -> MarketplaceItem | None:
        async with self._unit_of_work(ErrorContext(operation="get_by_id", item_id=item_id)):
            result = await self._session.execute(
                select(MarketplaceItemRow).where(MarketplaceItemRow.id == item_id),
            )
            row = result.scalar_one_or_none()
        return _to_entity(row) if row else None

    async def get_by_external_id(
        self, external_item_id: str,
    ) -> MarketplaceItem | None:
        context = ErrorContext(
            operation="get_by_external_id", external_item_id=external_item_id,
        )
        async with self._unit_of_work(context):
            row = await self._find_row_by_external_id(external_item_id)
        return _to_entity(row) if row else None

    async def list(
        self,
        platform_id: int | None = None,
        search_term: str | None = None,
        page_number: int = 1,
        page_size: int = 50,
    ) -> list[MarketplaceItem]:
        skip = (max(page_number, 1) - 1) * page_size
        if skip > _MAX_OFFSET:
            return []
        query = _apply_filters(
            select(MarketplaceItemRow), platform_id, search_term,
        )
        query = _newest_first(query).offset(skip).limit(page_size)
        async with self._unit_of_work(ErrorContext(operation="list")):
            result = await self._session.execute(query)
            rows = result.scalars().all()
        return [_to_entity(row) for row in rows]

    async def count(
        self, platform_id: int | None = None, search_term: str | None = None,
    ) -> int:
        query = _apply_filters(
            select(func.count(MarketplaceItemRow.id)), platform_id, search_term,
        )
        async with self._unit_of_work(ErrorContext(operation="count")):
            result = await self._session.execute(query)
            return result.scalar_one()

    async def list_by_seller(self, seller_id: str) -> list[MarketplaceItem]:
        query = select(MarketplaceItemRow).where(
            MarketplaceItemRow.seller_id == seller_id,
        )
        return await self._fetch_all(_newest_first(query), "list_by_seller")

    async def list_by_price_range(
        self, min_usd: Decimal | None = None, max_usd: Decimal | None = None,
    ) -> list[MarketplaceItem]:
        query = select(MarketplaceItemRow)
        if min_usd is not None:
            query = query.where(MarketplaceItemRow.price_usd >= min_usd)
        if max_usd is not None:
            query = query.where(MarketplaceItemRow.price_usd <= max_usd)
        return await self._fetch_all(_newest_first(query), "list_by_price_range")

    async def list_recently_detected(
        self, hours_ago: int = 24,
    ) -> list[MarketplaceItem]:
        query = select(MarketplaceItemRow).where(
            MarketplaceItemRow.detected_date >= _detected_cutoff(hours_ago),
        )
        return await self._fetch_all(_newest_first(query), "list_recently_detected")

    # ─── Mutations ──────────────────────────────────────────────

    async def insert(self, item: MarketplaceItem) -> MarketplaceItem:
        context = ErrorContext(
            operation="insert", external_item_id=item.external_item_id,
        )
        async with self._unit_of_work(context):
            item.mark_created()
            row = MarketplaceItemRow(created_at=item.created_at)
            _copy_to_row(item, row)
            self._session.add(row)
            try:
                await self._session.commit()
            except IntegrityError as e:
                await self._session.rollback()
                if await self._find_row_by_external_id(item.external_item_id):
                    raise DuplicateItemError(item.external_item_id, context) from e
                raise DatabaseError("Integrity constraint violated", "insert", context) from e
        logger.debug(
            "Inserted marketplace item",
            extra={"item_id": row.id, "external_item_id": row.external_item_id},
        )
        return _to_entity(row)

    async def update(self, item: MarketplaceItem) -> MarketplaceItem:
        context = ErrorContext(operation="update", item_id=item.id)
        async with self._unit_of_work(context):
            row = await self._session.get(MarketplaceItemRow, item.id)
            if row is None:
                raise ResourceNotFoundError("MarketplaceItem", str(item.id), context)
            item.mark_updated()
            _copy_to_row(item, row)
            try:
                await self._session.commit()
            except IntegrityError as e:
                await self._session.rollback()
                raise DuplicateItemError(item.external_item_id, context) from e
        return _to_entity(row)

    async def delete(self, item_id: int) -> bool:
        context = ErrorContext(operation="delete", item_id=item_id)
        async with self._unit_of_work(context):
            result = await self._session.execute(
                delete(MarketplaceItemRow).where(MarketplaceItemRow.id == item_id),
            )
            await self._session.commit()
        return result.rowcount > 0

    # ─── Internals ──────────────────────────────────────────────

    @asynccontextmanager
    async def _unit_of_work(self, context: ErrorContext) -> AsyncGenerator[None, None]:
        """Bound one storage operation in time; undo its pending writes if abandoned."""
        try:
            async with asyncio.timeout(self._timeout_seconds):
                yield
        except TimeoutError as e:
            await self._session.rollback()
            raise StorageTimeoutError(
                context.operation or "unknown", self._timeout_seconds or 0, context,
            ) from e
        except asyncio.CancelledError:
            await self._session.rollback()
            raise

    async def _fetch_all(self, query: Select, operation: str) -> list[MarketplaceItem]:
        async with self._unit_of_work(ErrorContext(operation=operation)):
            result = await self._session.execute(query)
            rows = result.scalars().all()
        return [_to_entity(row) for row in rows]

    async def _find_row_by_external_id(
        self, external_item_id: str,
    ) -> MarketplaceItemRow | None:
        result = await self._session.execute(
            select(MarketplaceItemRow).where(
                MarketplaceItemRow.external_item_id == external_item_id,
            ),
        )
        return result.scalar_one_or_none()


# --- Query helpers ------------------------------------------------------------

def _apply_filters(
    query: Select, platform_id: int | None, search_term: str | None,
) -> Select:
    """Shared predicate for list() and count()."""
    if platform_id is not None:
        query = query.where(MarketplaceItemRow.platform_id == platform_id)
    if search_term and search_term.strip():
        query = query.where(
            MarketplaceItemRow.search_term.contains(search_term, autoescape=True),
        )
    return query


def _detected_cutoff(hours_ago: int) -> datetime:
    """now - hours_ago, floored at the earliest representable datetime."""
    try:
        return utc_now() - timedelta(hours=hours_ago)
    except OverflowError:
        return _EARLIEST


def _newest_first(query: Select) -> Select:
    return query.order_by(
        MarketplaceItemRow.detected_date.desc(), MarketplaceItemRow.id.desc(),
    )


# --- Mapping ------------------------------------------------------------------

def _copy_to_row(item: MarketplaceItem, row: MarketplaceItemRow) -> None:
    for column in _MUTABLE_COLUMNS:
        setattr(row, column, getattr(item, column))


def _to_entity(row: MarketplaceItemRow) -> MarketplaceItem:
    """Rebuild the entity; SQLite hands back naive datetimes, stored as UTC."""
    return MarketplaceItem(
        id=row.id,
        external_item_id=row.external_item_id,
        title=row.title,
        platform_id=row.platform_id,
        search_term=row.search_term,
        quantity_text=row.quantity_text,
        quantity_number=row.quantity_number,
        price_text=row.price_text,
        price_usd=row.price_usd,
        product_id=row.product_id,
        seller_id=row.seller_id,
        seller_name=row.seller_name,
        seller_url=row.seller_url,
        seller_location=row.seller_location,
        item_image_url=row.item_image_url,
        item_url=row.item_url,
        detected_date=as_utc(row.detected_date),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )
