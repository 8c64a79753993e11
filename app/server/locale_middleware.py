from starlette.middleware.base import BaseHTTPMiddleware

from infrastructure.services import get_locale_negotiator


class LocaleMiddleware(BaseHTTPMiddleware):
    """Negotiate the content locale once per request.

    Sets `request.state.locale` from the `locale` query parameter, then the
    Accept-Language header, then the default locale.
    """

    def __init__(self, app, negotiator_provider=get_locale_negotiator):
        super().__init__(app)
        self.negotiator_provider = negotiator_provider

    async def dispatch(self, request, call_next):
        negotiator = self.negotiator_provider()
        request.state.locale = negotiator.negotiate(
            request.query_params.get("locale"),
            request.headers.get("accept-language"),
        )
        response = await call_next(request)
        response.headers.setdefault("Content-Language", request.state.locale)
        return response
