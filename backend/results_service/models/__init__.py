"""ORM Models: SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM rows never leave infrastructure/: repositories map them to core entities

Design Decisions:
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from results_service.models.marketplace_item import MarketplaceItemRow  # noqa: F401
