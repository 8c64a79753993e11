"""Server infrastructure settings."""

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """Server and application runtime configuration.

    Environment Variables:
        PUBLIC_URL: Public base URL of this API (default: http://127.0.0.1:8000)
        ADMIN_URL: Base URL of the admin panel, used for links in notification
            emails and to absolutize relative file URLs
            (default: http://localhost:1337)
        CORS_ORIGINS: JSON list of allowed origins outside production
        TRUSTED_PROXIES: JSON list of proxy addresses whose X-Forwarded-For
            headers are honoured (default: none, the peer address is used)
        ISSUER_CONFIG: JSON dict of JWT issuers, each with jwks_uri,
            algorithms and audience
        JWT_SECRET: Shared HS256 secret for tokens without a configured issuer
        JWT_AUDIENCE: Expected audience of HS256 tokens

    Example:
        ```python
        from infrastructure.services import get_settings

        admin_url = get_settings().server.ADMIN_URL
        ```
    """

    PUBLIC_URL: str = "http://127.0.0.1:8000"
    ADMIN_URL: str = "http://localhost:1337"
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:8000", "http://127.0.0.1:8000"]
    )
    TRUSTED_PROXIES: List[str] = Field(default_factory=list)
    ISSUER_CONFIG: Optional[Dict[str, Dict[str, Any]]] = None
    JWT_SECRET: Optional[str] = None
    JWT_AUDIENCE: Optional[str] = None

    @field_validator("ADMIN_URL", "PUBLIC_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
