"""Item Validation Rules: field-level constraints for create and update payloads.

Invariants:
    - All functions are PURE: payload in, ordered list of FieldViolation out
    - An empty list means the payload is acceptable
    - Rules run in a fixed field order so every problem is reported at once
    - Validation never reaches storage

Design Decisions:
    - Payloads are plain mappings (request.model_dump()): the rules do not depend on
      the Pydantic schemas, which only parse shape and types
    - Blank optional URLs are treated as absent, matching how the service decides
      whether an update group was supplied
"""

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from urllib.parse import urlsplit

from results_service.core.domain_types import (
    DETECTED_DATE_SKEW,
    MAX_EXTERNAL_ID_LENGTH,
    MAX_IDENTIFIER_LENGTH,
    MAX_PRICE_TEXT_LENGTH,
    MAX_PRICE_USD_EXCLUSIVE,
    MAX_RECENT_HOURS,
    MAX_QUANTITY_TEXT_LENGTH,
    MAX_SEARCH_TERM_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
    PRICE_DECIMAL_PLACES,
)
from results_service.core.errors import FieldViolation
from results_service.core.marketplace_item import as_utc, utc_now


# --- Composite validators -----------------------------------------------------

def validate_create_item(
    payload: Mapping[str, object], now: datetime | None = None,
) -> list[FieldViolation]:
    """Rules for a new item. external_item_id, title and platform_id are required."""
    violations: list[FieldViolation] = []
    violations += check_required_text(payload, "external_item_id", MAX_EXTERNAL_ID_LENGTH)
    violations += check_required_text(payload, "title", MAX_TITLE_LENGTH)
    violations += check_positive_int(payload, "platform_id")
    violations += check_url(payload, "item_image_url")
    violations += check_url(payload, "item_url")
    violations += check_max_length(payload, "search_term", MAX_SEARCH_TERM_LENGTH)
    violations += check_max_length(payload, "quantity_text", MAX_QUANTITY_TEXT_LENGTH)
    violations += check_non_negative(payload, "quantity_number")
    violations += check_max_length(payload, "price_text", MAX_PRICE_TEXT_LENGTH)
    violations += check_price(payload, "price_usd")
    violations += check_max_length(payload, "product_id", MAX_IDENTIFIER_LENGTH)
    violations += _check_seller_fields(payload)
    violations += check_detected_date(payload, now)
    return violations


def validate_update_item(payload: Mapping[str, object]) -> list[FieldViolation]:
    """Rules for an update. Every field is optional."""
    violations: list[FieldViolation] = []
    violations += check_url(payload, "item_image_url")
    violations += check_url(payload, "item_url")
    violations += check_max_length(payload, "quantity_text", MAX_QUANTITY_TEXT_LENGTH)
    violations += check_non_negative(payload, "quantity_number")
    violations += check_max_length(payload, "price_text", MAX_PRICE_TEXT_LENGTH)
    violations += check_price(payload, "price_usd")
    violations += _check_seller_fields(payload)
    return violations


def validate_price_range(
    min_usd: Decimal | None, max_usd: Decimal | None,
) -> list[FieldViolation]:
    """Bounds are optional and inclusive; min must not exceed max."""
    violations: list[FieldViolation] = []
    if min_usd is not None and min_usd < 0:
        violations.append(FieldViolation("min_price", "min_price must be greater than or equal to 0"))
    if max_usd is not None and max_usd < 0:
        violations.append(FieldViolation("max_price", "max_price must be greater than or equal to 0"))
    if min_usd is not None and max_usd is not None and min_usd > max_usd:
        violations.append(FieldViolation(
            "min_price", "Minimum price cannot be greater than maximum price",
        ))
    return violations


def validate_hours_ago(hours_ago: int) -> list[FieldViolation]:
    if hours_ago <= 0:
        return [FieldViolation("hours_ago", "hours_ago must be greater than 0")]
    if hours_ago > MAX_RECENT_HOURS:
        return [FieldViolation(
            "hours_ago", f"hours_ago cannot exceed {MAX_RECENT_HOURS}",
        )]
    return []


# --- Field rules --------------------------------------------------------------

def check_required_text(
    payload: Mapping[str, object], name: str, max_length: int,
) -> list[FieldViolation]:
    value = payload.get(name)
    if not isinstance(value, str) or not value.strip():
        return [FieldViolation(name, f"{name} is required")]
    return check_max_length(payload, name, max_length)


def check_max_length(
    payload: Mapping[str, object], name: str, max_length: int,
) -> list[FieldViolation]:
    value = payload.get(name)
    if isinstance(value, str) and len(value) > max_length:
        return [FieldViolation(name, f"{name} cannot exceed {max_length} characters")]
    return []


def check_positive_int(payload: Mapping[str, object], name: str) -> list[FieldViolation]:
    value = payload.get(name)
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        return [FieldViolation(name, f"{name} must be greater than 0")]
    return []


def check_non_negative(payload: Mapping[str, object], name: str) -> list[FieldViolation]:
    value = payload.get(name)
    if value is not None and value < 0:
        return [FieldViolation(name, f"{name} must be greater than or equal to 0")]
    return []


def check_price(payload: Mapping[str, object], name: str) -> list[FieldViolation]:
    """Non-negative amount that fits NUMERIC(18,2) without rounding."""
    value = payload.get(name)
    if value is None:
        return []
    if value < 0:
        return [FieldViolation(name, f"{name} must be greater than or equal to 0")]
    if value >= MAX_PRICE_USD_EXCLUSIVE:
        return [FieldViolation(name, f"{name} must be less than {MAX_PRICE_USD_EXCLUSIVE}")]
    if Decimal(value) != round(Decimal(value), PRICE_DECIMAL_PLACES):
        return [FieldViolation(
            name, f"{name} cannot have more than {PRICE_DECIMAL_PLACES} decimal places",
        )]
    return []


def check_url(payload: Mapping[str, object], name: str) -> list[FieldViolation]:
    """Optional absolute http(s) URL. Blank counts as absent."""
    value = payload.get(name)
    if not isinstance(value, str) or not value.strip():
        return []
    violations = check_max_length(payload, name, MAX_URL_LENGTH)
    if not is_http_url(value):
        violations.append(FieldViolation(name, f"{name} must be a valid URL"))
    return violations


def check_detected_date(
    payload: Mapping[str, object], now: datetime | None = None,
) -> list[FieldViolation]:
    value = payload.get("detected_date")
    if not isinstance(value, datetime):
        return []
    latest = (as_utc(now) if now else utc_now()) + DETECTED_DATE_SKEW
    if as_utc(value) > latest:
        return [FieldViolation("detected_date", "detected_date cannot be in the future")]
    return []


def is_http_url(value: str) -> bool:
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc) and bool(parts.hostname)


def _check_seller_fields(payload: Mapping[str, object]) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    violations += check_max_length(payload, "seller_id", MAX_IDENTIFIER_LENGTH)
    violations += check_max_length(payload, "seller_name", MAX_IDENTIFIER_LENGTH)
    violations += check_url(payload, "seller_url")
    violations += check_max_length(payload, "seller_location", MAX_IDENTIFIER_LENGTH)
    return violations
