"""Item Validation Rules: pure tests for create/update payload checks.

Tests cover:
    - Required fields, length limits and positive platform_id
    - URL format (blank treated as absent)
    - Non-negative numbers, detected_date skew
    - Price range and hours_ago query rules
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from results_service.core.domain_types import MAX_RECENT_HOURS, MAX_TITLE_LENGTH
from results_service.core.validate_item import (
    is_http_url,
    validate_create_item,
    validate_hours_ago,
    validate_price_range,
    validate_update_item,
)

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def _valid_create(**overrides) -> dict:
    payload = {
        "external_item_id": "ml-1",
        "title": "Vintage camera",
        "platform_id": 1,
    }
    payload.update(overrides)
    return payload


def _fields(violations) -> list[str]:
    return [v.field for v in violations]


# -- validate_create_item ----------------------------------------------------

def test_minimal_create_payload_is_valid():
    assert validate_create_item(_valid_create(), NOW) == []


def test_missing_required_fields_reported_together():
    violations = validate_create_item({"platform_id": 0}, NOW)
    assert _fields(violations) == ["external_item_id", "title", "platform_id"]
    assert violations[0].message == "external_item_id is required"
    assert violations[2].message == "platform_id must be greater than 0"


def test_title_too_long():
    violations = validate_create_item(
        _valid_create(title="x" * (MAX_TITLE_LENGTH + 1)), NOW,
    )
    assert len(violations) == 1
    assert violations[0].message == f"title cannot exceed {MAX_TITLE_LENGTH} characters"


def test_invalid_urls_rejected():
    violations = validate_create_item(
        _valid_create(item_url="not a url", seller_url="ftp://files.example"), NOW,
    )
    assert _fields(violations) == ["item_url", "seller_url"]
    assert violations[0].message == "item_url must be a valid URL"


def test_blank_url_treated_as_absent():
    assert validate_create_item(_valid_create(item_image_url="  "), NOW) == []


def test_negative_numbers_rejected():
    violations = validate_create_item(
        _valid_create(quantity_number=-1, price_usd=Decimal("-0.01")), NOW,
    )
    assert _fields(violations) == ["quantity_number", "price_usd"]


def test_zero_price_allowed():
    assert validate_create_item(_valid_create(price_usd=Decimal("0")), NOW) == []


def test_detected_date_within_skew_allowed():
    payload = _valid_create(detected_date=NOW + timedelta(minutes=59))
    assert validate_create_item(payload, NOW) == []


def test_detected_date_beyond_skew_rejected():
    payload = _valid_create(detected_date=NOW + timedelta(hours=2))
    violations = validate_create_item(payload, NOW)
    assert _fields(violations) == ["detected_date"]
    assert violations[0].message == "detected_date cannot be in the future"


# -- validate_update_item ----------------------------------------------------

def test_empty_update_is_valid():
    assert validate_update_item({}) == []


def test_update_checks_seller_and_price():
    violations = validate_update_item(
        {"seller_id": "s" * 256, "price_usd": Decimal("-1")},
    )
    assert sorted(_fields(violations)) == ["price_usd", "seller_id"]


# -- query rules ---------------------------------------------------------------

def test_price_range_min_above_max():
    violations = validate_price_range(Decimal("10"), Decimal("5"))
    assert len(violations) == 1
    assert violations[0].message == "Minimum price cannot be greater than maximum price"


def test_price_range_open_bounds_valid():
    assert validate_price_range(None, None) == []
    assert validate_price_range(Decimal("5"), None) == []
    assert validate_price_range(Decimal("5"), Decimal("5")) == []


def test_price_range_negative_bound():
    assert _fields(validate_price_range(Decimal("-1"), None)) == ["min_price"]


def test_hours_ago_must_be_positive():
    assert validate_hours_ago(1) == []
    assert _fields(validate_hours_ago(0)) == ["hours_ago"]


def test_is_http_url():
    assert is_http_url("https://shop.example/item/1")
    assert is_http_url("http://localhost:8080")
    assert not is_http_url("shop.example/item")
    assert not is_http_url("mailto:someone@example.com")


def test_hours_ago_upper_bound():
    assert validate_hours_ago(MAX_RECENT_HOURS) == []
    violations = validate_hours_ago(MAX_RECENT_HOURS + 1)
    assert violations[0].message == f"hours_ago cannot exceed {MAX_RECENT_HOURS}"


def test_price_must_fit_two_decimals():
    assert validate_create_item(_valid_create(price_usd=Decimal("10.50")), NOW) == []
    assert validate_create_item(_valid_create(price_usd=Decimal("10.500")), NOW) == []
    violations = validate_create_item(_valid_create(price_usd=Decimal("10.005")), NOW)
    assert _fields(violations) == ["price_usd"]
    assert violations[0].message == "price_usd cannot have more than 2 decimal places"


def test_price_must_fit_column_precision():
    assert validate_update_item({"price_usd": Decimal("9999999999999999.99")}) == []
    violations = validate_update_item({"price_usd": Decimal("10000000000000000")})
    assert _fields(violations) == ["price_usd"]
