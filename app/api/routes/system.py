from fastapi import APIRouter, Request

from api.dependencies.rate_limits import get_limiter
from infrastructure.services import LocaleRegistryDep, SettingsDep

router = APIRouter(tags=["System"])
limiter = get_limiter()


# Load balancer health checks poll these endpoints several times a minute.
@router.get("/version")
@limiter.limit("50/minute")
def get_version(request: Request, settings: SettingsDep):  # pylint: disable=unused-argument
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit("50/minute")
def get_health(request: Request, registry: LocaleRegistryDep):  # pylint: disable=unused-argument
    """Healthcheck endpoint."""
    default = registry.default
    return {
        "status": "ok",
        "locales": registry.codes,
        "default_locale": default.code if default else None,
    }
