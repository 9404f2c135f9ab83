"""Error Hierarchy: typed, categorized exceptions for all Results Service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Business errors (400-level) are raised by the service or routes;
      infrastructure errors (500-level) by the storage adapter
    - "Not found" is an absence (None) in the service; only routes raise ResourceNotFoundError
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with ResultsServiceError base: one FastAPI global handler catches all
    - ErrorContext as dataclass: operation + identifying key travel with the error
      to the boundary where it is logged once
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    INVALID_ARGUMENT = "invalid_argument"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    item_id: int | None = None
    external_item_id: str | None = None
    debug_info: dict[str, Any] | None = None


@dataclass(frozen=True)
class FieldViolation:
    """One failed field rule: which field, and what is wrong with it."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class ResultsServiceError(Exception):
    """Base exception for all Results Service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "item_id": self.context.item_id,
                    "external_item_id": self.context.external_item_id,
                },
            }
        }

    def log_extra(self) -> dict:
        """Fields attached to the single boundary log record."""
        return {
            "error_code": self.code,
            "operation": self.context.operation,
            "item_id": self.context.item_id,
            "external_item_id": self.context.external_item_id,
        }


# ─── Business Errors (400-level) ────────────────────────────────

class InvalidArgumentError(ResultsServiceError):
    """A required input is missing or malformed."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.INVALID_ARGUMENT,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ValidationFailedError(ResultsServiceError):
    """Request payload broke one or more field rules."""
    def __init__(
        self, violations: list[FieldViolation], context: ErrorContext | None = None,
    ):
        super().__init__(
            "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.violations = list(violations)

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [v.to_dict() for v in self.violations]
        return response


class ResourceNotFoundError(ResultsServiceError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class ConflictError(ResultsServiceError):
    """State conflict, e.g. a uniqueness rule would be broken."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class DuplicateItemError(ConflictError):
    """An item with this external id is already stored."""
    def __init__(self, external_item_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.external_item_id = external_item_id
        super().__init__(
            f"Item with external_item_id '{external_item_id}' already exists", ctx,
        )
        self.code = "DUPLICATE_ITEM"
        self.external_item_id = external_item_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ResultsServiceError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class StorageTimeoutError(ResultsServiceError):
    """Storage operation overran its time budget and was abandoned."""
    def __init__(self, operation: str, timeout_seconds: float, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Storage operation '{operation}' timed out after {timeout_seconds}s",
            "STORAGE_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.CRITICAL, ctx, 504,
        )
        self.operation = operation
