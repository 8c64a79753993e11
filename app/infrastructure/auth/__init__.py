"""Infrastructure auth module - bearer token validation and role checks.

Exports:
    validate_jwt_token: Bearer token validation dependency
    require_roles: Dependency factory accepting tokens with one of the roles
    require_editor: Admin or Content Editor
    require_admin: Admin only
    JWKSManager: JWKS clients per configured issuer
"""

from infrastructure.auth.security import (
    ADMIN_ROLE,
    EDITOR_ROLE,
    EDITOR_ROLES,
    JWKSManager,
    get_issuer_from_token,
    get_jwks_manager,
    require_admin,
    require_editor,
    require_roles,
    token_roles,
    validate_jwt_token,
)

__all__ = [
    "ADMIN_ROLE",
    "EDITOR_ROLE",
    "EDITOR_ROLES",
    "JWKSManager",
    "get_issuer_from_token",
    "get_jwks_manager",
    "require_admin",
    "require_editor",
    "require_roles",
    "token_roles",
    "validate_jwt_token",
]
