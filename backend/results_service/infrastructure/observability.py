"""Structured Logging: JSON formatter, correlation ids and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (correlation_id, operation, item_id, error_code, ...) surfaced when present
    - correlation_id comes from a ContextVar set per request; "-" outside a request
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency
    - CorrelationIdFilter attached to the handler so every record carries the id,
      including records from libraries
    - setup_logging called once on startup via lifespan; repeated calls replace the handler
"""

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="-")

_EXTRA_FIELDS = (
    "correlation_id", "operation", "item_id", "external_item_id",
    "error_code", "path", "method", "status_code", "duration_ms",
)


class CorrelationIdFilter(logging.Filter):
    """Stamp the current request's correlation id on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "correlation_id", None) is None:
            record.correlation_id = correlation_id_var.get()
        return True


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure logging for the application."""
    global _handler
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(correlation_id)s] %(message)s",
        ))
    handler.addFilter(CorrelationIdFilter())
    if _handler is not None:
        logging.root.removeHandler(_handler)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _handler = handler
