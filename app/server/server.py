from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies.errors import setup_error_handlers
from api.dependencies.rate_limits import (
    get_limiter,
    setup_proxy_headers,
    setup_rate_limiter,
)
from api.router import api_router
from infrastructure.logging import get_module_logger
from infrastructure.services import get_settings
from server.lifespan import lifespan
from server.locale_middleware import LocaleMiddleware
from server.request_context import RequestContextMiddleware

logger = get_module_logger()
settings = get_settings()


handler = FastAPI(title="Localized Content API", lifespan=lifespan)
setup_rate_limiter(handler)
setup_error_handlers(handler)
limiter = get_limiter()


allow_origins = ["*"] if settings.is_production else settings.server.CORS_ORIGINS
handler.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
handler.add_middleware(RequestContextMiddleware)
# Added last so it runs first and the request context sees the locale.
handler.add_middleware(LocaleMiddleware)
# Outermost: the client address is rewritten before any other layer runs.
setup_proxy_headers(handler, settings.server.TRUSTED_PROXIES)


handler.include_router(api_router)
