"""FastAPI Dependencies: per-request wiring of repository and service.

Invariants:
    - One repository and one service per request, sharing the request's AsyncSession
    - Routes depend on get_item_service only; tests override get_db
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from results_service.config import get_settings
from results_service.infrastructure.database import get_db
from results_service.infrastructure.marketplace_item_repository import (
    SqlAlchemyMarketplaceItemRepository,
)
from results_service.services.marketplace_item_service import MarketplaceItemService


def get_item_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlAlchemyMarketplaceItemRepository:
    return SqlAlchemyMarketplaceItemRepository(
        db, timeout_seconds=get_settings().database_operation_timeout_seconds,
    )


def get_item_service(
    repository: SqlAlchemyMarketplaceItemRepository = Depends(get_item_repository),
) -> MarketplaceItemService:
    return MarketplaceItemService(repository)
