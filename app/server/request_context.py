import time

from starlette.middleware.base import BaseHTTPMiddleware

from infrastructure.logging import get_module_logger
from infrastructure.logging.context import CORRELATION_HEADER, bind_request_context

logger = get_module_logger()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id and request metadata to every log of a request.

    The correlation id is taken from the X-Correlation-ID header when the
    caller sends one, and echoed back on the response.
    """

    async def dispatch(self, request, call_next):
        with bind_request_context(
            correlation_id=request.headers.get(CORRELATION_HEADER),
            request_path=request.url.path,
            request_method=request.method,
            locale=getattr(request.state, "locale", None),
        ) as correlation_id:
            started = time.perf_counter()
            response = await call_next(request)
            logger.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
