"""Bearer token validation and role checks for content mutations.

Tokens are validated against the JWKS of their issuer when the issuer is
configured (ISSUER_CONFIG), otherwise against the shared HS256 secret
(JWT_SECRET). Reads stay public; writes require an editor role and deletes
the admin role.
"""

from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional, Sequence

from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWKClient, PyJWKClientError, PyJWTError, decode

from infrastructure.configuration import Settings
from infrastructure.logging import get_module_logger
from infrastructure.services.providers import get_settings

logger = get_module_logger()
security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "Admin"
EDITOR_ROLE = "Content Editor"
EDITOR_ROLES = (ADMIN_ROLE, EDITOR_ROLE)


class JWKSManager:
    """Manage JWKS clients for different issuers.

    Attributes:
        issuer_config: Dictionary containing issuer configurations
        jwks_clients: Dictionary to store JWKS clients for each issuer
    """

    def __init__(self, issuer_config: Optional[Dict[str, Dict[str, Any]]]):
        self.issuer_config = issuer_config
        self.jwks_clients: Dict[str, PyJWKClient] = {}

    def is_trusted(self, issuer: Optional[str]) -> bool:
        return bool(issuer and self.issuer_config and issuer in self.issuer_config)

    def get_jwks_client(self, issuer: str) -> Optional[PyJWKClient]:
        """Get the JWKS client of a configured issuer, None when unknown."""
        if not self.is_trusted(issuer):
            return None
        if issuer not in self.jwks_clients:
            cfg = self.issuer_config[issuer]
            self.jwks_clients[issuer] = PyJWKClient(
                cfg["jwks_uri"], cache_jwk_set=True, lifespan=3600, timeout=10
            )
        return self.jwks_clients[issuer]


@lru_cache
def get_jwks_manager() -> JWKSManager:
    return JWKSManager(get_settings().server.ISSUER_CONFIG)


def get_issuer_from_token(token: str) -> Optional[str]:
    """Extract the issuer from the token without verifying the signature."""
    try:
        unverified_payload = decode(token, options={"verify_signature": False})
    except PyJWTError:
        return None
    return unverified_payload.get("iss")


def token_roles(payload: Dict[str, Any]) -> List[str]:
    """Roles of a token: the `roles` claim plus a single `role` claim."""
    roles = payload.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    granted = [str(role) for role in roles]
    if payload.get("role"):
        granted.append(str(payload["role"]))
    return granted


def _decode_issuer_token(
    token: str, issuer: str, jwks_manager: JWKSManager
) -> Dict[str, Any]:
    cfg = jwks_manager.issuer_config[issuer]
    jwks_client = jwks_manager.get_jwks_client(issuer)
    signing_key = jwks_client.get_signing_key_from_jwt(token)
    return decode(
        token,
        signing_key.key,
        algorithms=cfg["algorithms"],
        audience=cfg.get("audience"),
        options={"verify_exp": True},
    )


async def validate_jwt_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    settings: Settings = Depends(get_settings),
    jwks_manager: JWKSManager = Depends(get_jwks_manager),
) -> Dict[str, Any]:
    """Validate the bearer token and return its payload.

    Raises:
        HTTPException: 401 if the token is missing, untrusted or invalid.
    """
    if (
        credentials is None
        or credentials.scheme.lower() != "bearer"
        or not credentials.credentials
    ):
        raise HTTPException(status_code=401, detail="Missing or invalid token")
    token = credentials.credentials
    issuer = get_issuer_from_token(token)

    try:
        if jwks_manager.is_trusted(issuer):
            return _decode_issuer_token(token, issuer, jwks_manager)
        if settings.server.JWT_SECRET:
            return decode(
                token,
                settings.server.JWT_SECRET,
                algorithms=["HS256"],
                audience=settings.server.JWT_AUDIENCE,
            )
    except (PyJWKClientError, PyJWTError) as e:
        logger.warning("jwt_validation_failed", error=str(e), issuer=issuer)
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}") from e

    raise HTTPException(status_code=401, detail="Untrusted or missing token issuer")


def require_roles(roles: Sequence[str]) -> Callable[..., Any]:
    """Dependency accepting tokens that carry at least one of `roles`."""
    allowed = set(roles)

    async def check_roles(
        payload: Dict[str, Any] = Depends(validate_jwt_token),
    ) -> Dict[str, Any]:
        granted = token_roles(payload)
        if not allowed.intersection(granted):
            logger.warning(
                "insufficient_role",
                subject=payload.get("sub"),
                roles=granted,
                required=sorted(allowed),
            )
            raise HTTPException(status_code=403, detail="Insufficient role")
        return payload

    return check_roles


require_editor = require_roles(EDITOR_ROLES)
require_admin = require_roles((ADMIN_ROLE,))
