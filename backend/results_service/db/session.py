"""Schema Bootstrap: create tables directly from ORM metadata.

Invariants:
    - Used for SQLite (local runs, test fixtures); PostgreSQL schema is owned by alembic
    - Imports every model so Base.metadata is complete before create_all

Design Decisions:
    - Separate from infrastructure/database.py: takes a bare engine, no session handling
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from results_service.db.base import Base


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables known to Base."""
    import results_service.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
