"""Security: session token verification."""

from practice_access.infrastructure.security.jwt import (
    create_access_token,
    principal_from_token,
    verify_token,
)

__all__ = ["create_access_token", "principal_from_token", "verify_token"]
