"""Error Hierarchy: codes, statuses and response envelopes.

Tests:
    - Each concrete error maps to its code and HTTP status
    - ValidationFailedError envelope carries per-field details
    - DuplicateItemError is a ConflictError and records the external id
"""

from results_service.core.errors import (
    ConflictError,
    DatabaseError,
    DuplicateItemError,
    ErrorContext,
    FieldViolation,
    InvalidArgumentError,
    ResourceNotFoundError,
    StorageTimeoutError,
    ValidationFailedError,
)


def test_status_codes():
    assert InvalidArgumentError("bad", "title").http_status == 400
    assert ValidationFailedError([]).http_status == 400
    assert ResourceNotFoundError("MarketplaceItem", "1").http_status == 404
    assert DuplicateItemError("ml-1").http_status == 409
    assert DatabaseError("boom", "insert").http_status == 500
    assert StorageTimeoutError("list", 2.0).http_status == 504


def test_not_found_message():
    exc = ResourceNotFoundError("MarketplaceItem", "42")
    assert exc.message == "MarketplaceItem '42' not found"
    assert exc.code == "RESOURCE_NOT_FOUND"


def test_duplicate_is_conflict_with_context():
    exc = DuplicateItemError("ml-1", ErrorContext(operation="create"))
    assert isinstance(exc, ConflictError)
    assert exc.code == "DUPLICATE_ITEM"
    body = exc.to_response()["error"]
    assert body["category"] == "conflict"
    assert body["context"]["external_item_id"] == "ml-1"
    assert body["context"]["operation"] == "create"


def test_validation_envelope_has_details():
    exc = ValidationFailedError([
        FieldViolation("title", "title is required"),
        FieldViolation("platform_id", "platform_id must be greater than 0"),
    ])
    body = exc.to_response()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"] == [
        {"field": "title", "message": "title is required"},
        {"field": "platform_id", "message": "platform_id must be greater than 0"},
    ]


def test_database_error_defaults_operation():
    exc = DatabaseError("connection refused", "insert")
    assert exc.context.operation == "insert"
    assert exc.log_extra()["error_code"] == "DATABASE_ERROR"
    assert "connection refused" in exc.message


def test_timeout_message_names_operation():
    exc = StorageTimeoutError("count", 1.5)
    assert exc.message == "Storage operation 'count' timed out after 1.5s"
    assert exc.to_response()["error"]["category"] == "timeout"
