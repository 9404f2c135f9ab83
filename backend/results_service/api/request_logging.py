"""Request Logging Middleware: correlation id and access log per HTTP request.

Invariants:
    - Every request gets a correlation id: the caller's X-Correlation-ID if sent, else a new UUID4
    - The id is set on correlation_id_var for the whole request and echoed in the response header
    - One "request completed" record per request with method, path, status and duration
    - Request/response bodies are never logged

Design Decisions:
    - Plain ASGI middleware over BaseHTTPMiddleware: streaming responses and
      background tasks keep working, contextvars propagate to handlers
"""

import logging
import time
import uuid

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from results_service.infrastructure.observability import correlation_id_var

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware:
    """Tag each HTTP request with a correlation id and log its outcome."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = _incoming_correlation_id(scope) or str(uuid.uuid4())
        token = correlation_id_var.set(correlation_id)
        started = time.perf_counter()
        status_code = 500

        async def send_with_header(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = MutableHeaders(scope=message)
                headers[CORRELATION_HEADER] = correlation_id
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            logger.info(
                f"{scope['method']} {scope['path']} -> {status_code}",
                extra={
                    "method": scope["method"],
                    "path": scope["path"],
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            correlation_id_var.reset(token)


def _incoming_correlation_id(scope: Scope) -> str | None:
    for name, value in scope.get("headers", []):
        if name.decode("latin-1").lower() == CORRELATION_HEADER.lower():
            return value.decode("latin-1")[:128] or None
    return None
