"""Domain Types: rich types and limits shared across the codebase.

Invariants:
    - ItemId wraps the storage surrogate key; ExternalItemId wraps the platform key
    - Field length limits mirror the persisted column sizes
    - SegmentType values are stable integers (persisted by the scraping side)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - int Enum for SegmentType: platform catalogs reference segments by number
"""

from datetime import timedelta
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ItemId = NewType("ItemId", int)
ExternalItemId = NewType("ExternalItemId", str)
PlatformId = NewType("PlatformId", int)


# ─── Pagination ──────────────────────────────────────────────────

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100
DEFAULT_RECENT_HOURS = 24
MAX_RECENT_HOURS = 24 * 365 * 10


# ─── Field Limits ────────────────────────────────────────────────

MAX_EXTERNAL_ID_LENGTH = 255
MAX_TITLE_LENGTH = 500
MAX_URL_LENGTH = 1000
MAX_SEARCH_TERM_LENGTH = 255
MAX_QUANTITY_TEXT_LENGTH = 100
MAX_PRICE_TEXT_LENGTH = 100
MAX_IDENTIFIER_LENGTH = 255     # product_id, seller_id, seller_name, seller_location

# NUMERIC(18,2): 16 integer digits, 2 decimals
PRICE_DECIMAL_PLACES = 2
MAX_PRICE_USD_EXCLUSIVE = 10 ** 16

# Scraper clocks may run slightly ahead of ours
DETECTED_DATE_SKEW = timedelta(hours=1)


# ─── Enums ───────────────────────────────────────────────────────

class SegmentType(int, Enum):
    """Platform segments covered by the scrapers."""
    MARKETPLACE = 1
    SOCIAL_MEDIA = 2
    WEBSITES = 3
    DOMAIN = 4
    NFT = 5
    APPS = 6

    @property
    def description(self) -> str:
        return _SEGMENT_DESCRIPTIONS[self]

    @property
    def supports_real_time_monitoring(self) -> bool:
        # Social media needs special permissions, app stores expose different APIs
        return self not in (SegmentType.SOCIAL_MEDIA, SegmentType.APPS)


_SEGMENT_DESCRIPTIONS = {
    SegmentType.MARKETPLACE: "Online Marketplaces",
    SegmentType.SOCIAL_MEDIA: "Social Media Platforms",
    SegmentType.WEBSITES: "E-commerce Websites",
    SegmentType.DOMAIN: "Domain Marketplaces",
    SegmentType.NFT: "NFT Marketplaces",
    SegmentType.APPS: "App Stores",
}
