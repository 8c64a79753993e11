from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware


def client_ip(request: Request) -> Optional[str]:
    """Address of the connected peer.

    Forwarded headers are only honoured when the server trusts the proxy
    that sent them (TRUSTED_PROXIES), in which case the proxy headers
    middleware has already rewritten the peer address.
    """
    return request.client.host if request.client else None


limiter = Limiter(
    key_func=get_remote_address,
)


async def rate_limit_handler(_request: Request, exc: Exception):
    """Return 429 with a JSON message when a route limit is exceeded."""
    if isinstance(exc, RateLimitExceeded):
        return JSONResponse(
            status_code=429,
            content={"message": "Rate limit exceeded"},
        )


def setup_proxy_headers(app: FastAPI, trusted_proxies: List[str]):
    """Resolve client addresses from X-Forwarded-For sent by trusted proxies."""
    if trusted_proxies:
        app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=trusted_proxies)


def setup_rate_limiter(app: FastAPI):
    """
    Setup rate limiting for the FastAPI application.
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


def get_limiter():
    return limiter
