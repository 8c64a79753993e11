"""Request context binding for structured logging.

Binds request-scoped metadata (correlation id, path, method, locale) to
structlog context variables so every log entry of a request carries it.
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog

CORRELATION_HEADER = "X-Correlation-ID"


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    request_path: Optional[str] = None,
    request_method: Optional[str] = None,
    locale: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind request-scoped context to all logs within the block.

    Args:
        correlation_id: Unique request identifier. Generated if not provided.
        request_path: HTTP request path (e.g., "/api/v1/events/42").
        request_method: HTTP method.
        locale: Negotiated content locale.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation id in effect for the block.

    Example:
        with bind_request_context(
            correlation_id=request.headers.get("X-Correlation-ID"),
            request_path=request.url.path,
            request_method=request.method,
        ) as correlation_id:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if request_path is not None:
        context["request_path"] = request_path
    if request_method is not None:
        context["request_method"] = request_method
    if locale is not None:
        context["locale"] = locale

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    return structlog.contextvars.get_contextvars().get("correlation_id")


def set_correlation_id(correlation_id: str) -> None:
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_request_context() -> None:
    """Clear all request-scoped context, e.g. at the end of a background task."""
    structlog.contextvars.clear_contextvars()
