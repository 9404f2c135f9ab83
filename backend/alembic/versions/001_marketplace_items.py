"""Initial schema: marketplace_items.

Revision ID: 001_marketplace_items
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_marketplace_items"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "marketplace_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("external_item_id", sa.String(255), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("platform_id", sa.Integer, nullable=False),
        sa.Column("search_term", sa.String(255), nullable=True),
        sa.Column("quantity_text", sa.String(100), nullable=True),
        sa.Column("quantity_number", sa.Integer, nullable=True),
        sa.Column("price_text", sa.String(100), nullable=True),
        sa.Column("price_usd", sa.Numeric(18, 2), nullable=True),
        sa.Column("product_id", sa.String(255), nullable=True),
        sa.Column("seller_id", sa.String(255), nullable=True),
        sa.Column("seller_name", sa.String(255), nullable=True),
        sa.Column("seller_url", sa.String(1000), nullable=True),
        sa.Column("seller_location", sa.String(255), nullable=True),
        sa.Column("item_image_url", sa.String(1000), nullable=True),
        sa.Column("item_url", sa.String(1000), nullable=True),
        sa.Column("detected_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "external_item_id", name="uq_marketplace_items_external_item_id",
        ),
    )
    op.create_index(
        "ix_marketplace_items_external_item_id", "marketplace_items", ["external_item_id"],
    )
    op.create_index(
        "ix_marketplace_items_platform_id", "marketplace_items", ["platform_id"],
    )
    op.create_index(
        "ix_marketplace_items_seller_id", "marketplace_items", ["seller_id"],
    )
    op.create_index(
        "ix_marketplace_items_detected_date", "marketplace_items", ["detected_date"],
    )


def downgrade() -> None:
    op.drop_index("ix_marketplace_items_detected_date", table_name="marketplace_items")
    op.drop_index("ix_marketplace_items_seller_id", table_name="marketplace_items")
    op.drop_index("ix_marketplace_items_platform_id", table_name="marketplace_items")
    op.drop_index("ix_marketplace_items_external_item_id", table_name="marketplace_items")
    op.drop_table("marketplace_items")
