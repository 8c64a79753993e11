"""Request locale dependencies."""

from typing import Annotated, Optional

from fastapi import Depends, Request

from infrastructure.services import LocaleNegotiatorDep


def get_request_locale(request: Request, negotiator: LocaleNegotiatorDep) -> str:
    """Locale negotiated for the request.

    Uses the value set by the locale negotiation middleware when present,
    otherwise negotiates from the `locale` query parameter and the
    Accept-Language header.
    """
    locale: Optional[str] = getattr(request.state, "locale", None)
    if locale and negotiator.is_supported(locale):
        return locale
    return negotiator.negotiate(
        request.query_params.get("locale"), request.headers.get("accept-language")
    )


RequestLocale = Annotated[str, Depends(get_request_locale)]
