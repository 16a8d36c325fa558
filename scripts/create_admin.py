"""Register an administrator by principal id (identity provider uid).

Usage:
    uv run python -m scripts.create_admin <principal_id> <email> [full_name]
Admins are provisioned out of band; there is no HTTP route for it.
"""

import asyncio
import sys

import practice_access.infrastructure.persistence.database as database
from practice_access.core.config import get_settings
from practice_access.infrastructure.persistence.repositories import AdminRepository


async def main() -> None:
    """Insert the admin row; exits 1 if it already exists."""
    if len(sys.argv) < 3:
        print(
            "Usage: uv run python -m scripts.create_admin <principal_id> <email> [full_name]",
            file=sys.stderr,
        )
        sys.exit(1)
    principal_id = sys.argv[1]
    email = sys.argv[2].strip().lower()
    full_name = sys.argv[3] if len(sys.argv) > 3 else None

    get_settings()
    try:
        async with database.session_scope(transactional=True) as session:
            repo = AdminRepository(session)
            if await repo.get_by_id(principal_id) is not None:
                print(f"Admin already exists: {principal_id}", file=sys.stderr)
                sys.exit(1)
            admin = await repo.create(principal_id, email, full_name)
    finally:
        await database.dispose_engine()
    print(f"Created admin: {admin.id} ({admin.email})")


if __name__ == "__main__":
    asyncio.run(main())
