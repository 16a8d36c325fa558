"""Session token handling.

Sessions are JWTs issued by the identity provider and signed with the shared
secret; this service only verifies them and reads the principal (sub + email).
create_access_token exists for tooling and tests that need a signed session.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from practice_access.application.dtos.access import Principal
from practice_access.core.config import get_settings
from practice_access.shared.utils.datetime import utc_now

DEFAULT_TOKEN_TTL = timedelta(hours=8)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT with the given claims (e.g. sub, email).

    Args:
        data: Claims to encode.
        expires_delta: Optional TTL; defaults to 8 hours.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    to_encode["exp"] = utc_now() + (expires_delta or DEFAULT_TOKEN_TTL)
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload


def principal_from_token(token: str | None) -> Principal | None:
    """Return the principal for a valid token, or None (treated as unauthenticated)."""
    if not token:
        return None
    try:
        payload = verify_token(token)
    except ValueError:
        return None
    email = payload.get("email")
    return Principal(id=str(payload["sub"]), email=str(email) if email else None)
