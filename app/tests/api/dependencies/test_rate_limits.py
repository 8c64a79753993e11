from unittest.mock import Mock

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from api.dependencies import rate_limits
from api.routes.system import router as system_router
from utils.tests import rate_limiting_helper


def test_client_ip_is_the_peer_address():
    mock_request = Mock(spec=Request)
    mock_request.headers = {"x-forwarded-for": "203.0.113.7, 10.0.0.1"}
    mock_request.client.host = "192.168.1.1"

    assert rate_limits.client_ip(mock_request) == "192.168.1.1"


def test_client_ip_without_peer():
    mock_request = Mock(spec=Request)
    mock_request.headers = {}
    mock_request.client = None

    assert rate_limits.client_ip(mock_request) is None


def _whoami_app(trusted_proxies):
    app = FastAPI()

    @app.get("/whoami")
    async def whoami(request: Request):
        return {"ip": rate_limits.client_ip(request)}

    rate_limits.setup_proxy_headers(app, trusted_proxies)
    return app


async def _whoami(app, forwarded_for):
    transport = httpx.ASGITransport(app=app, client=("127.0.0.1", 4321))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/whoami", headers={"X-Forwarded-For": forwarded_for})
    return response.json()["ip"]


@pytest.mark.asyncio
async def test_forwarded_for_ignored_without_trusted_proxies():
    assert await _whoami(_whoami_app([]), "203.0.113.7") == "127.0.0.1"


@pytest.mark.asyncio
async def test_forwarded_for_ignored_from_untrusted_peer():
    assert await _whoami(_whoami_app(["10.0.0.1"]), "203.0.113.7") == "127.0.0.1"


@pytest.mark.asyncio
async def test_forwarded_for_honoured_from_trusted_proxy():
    assert await _whoami(_whoami_app(["127.0.0.1"]), "203.0.113.7") == "203.0.113.7"


@pytest.mark.asyncio
async def test_rate_limit_handler():
    mock_request = Mock(spec=Request)
    mock_exception = Mock(spec=RateLimitExceeded)

    response = await rate_limits.rate_limit_handler(mock_request, mock_exception)

    assert isinstance(response, JSONResponse)
    assert response.status_code == 429
    assert response.body.decode("utf-8") == '{"message":"Rate limit exceeded"}'


@pytest.mark.asyncio
async def test_system_endpoint_rate_limiting():
    """The /version route allows 50 requests a minute per client."""
    app = FastAPI()
    rate_limits.setup_rate_limiter(app)
    app.include_router(system_router)

    await rate_limiting_helper(app, "/version", 50)


@pytest.mark.asyncio
async def test_clients_are_limited_by_peer_address():
    app = FastAPI()
    rate_limits.setup_rate_limiter(app)
    app.include_router(system_router)

    await rate_limiting_helper(app, "/health", 50)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        spoofed = await client.get("/health", headers={"X-Forwarded-For": "203.0.113.2"})
    assert spoofed.status_code == 429

    transport = httpx.ASGITransport(app=app, client=("198.51.100.4", 4321))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")
    assert response.status_code == 200
