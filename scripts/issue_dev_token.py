"""Print a signed session token for local development.

Usage:
    uv run python -m scripts.issue_dev_token <principal_id> <email> [hours]
The token is accepted as the session cookie or as a Bearer token.
Never use in production; real sessions come from the identity provider.
"""

import sys
from datetime import timedelta

from practice_access.core.config import get_settings
from practice_access.infrastructure.security.jwt import create_access_token


def main() -> None:
    if len(sys.argv) < 3:
        print(
            "Usage: uv run python -m scripts.issue_dev_token <principal_id> <email> [hours]",
            file=sys.stderr,
        )
        sys.exit(1)
    hours = int(sys.argv[3]) if len(sys.argv) > 3 else 8
    settings = get_settings()
    token = create_access_token(
        {"sub": sys.argv[1], "email": sys.argv[2]}, expires_delta=timedelta(hours=hours)
    )
    print(token)
    print(f"Cookie name: {settings.session_cookie_name}", file=sys.stderr)


if __name__ == "__main__":
    main()
