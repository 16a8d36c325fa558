"""Admin action log repository. Append-only; implements IAdminActionLogRepository."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from practice_access.application.dtos.admin_action_log import (
    AdminActionLogCreate,
    AdminActionLogResult,
)
from practice_access.domain.exceptions import PersistenceException
from practice_access.infrastructure.persistence.models.admin_action_log import (
    AdminActionLog,
)
from practice_access.infrastructure.persistence.repositories.base import (
    BaseRepository,
    store_errors,
)
from practice_access.shared.utils.datetime import ensure_utc
from practice_access.shared.utils.generators import generate_cuid


def _orm_to_result(row: AdminActionLog) -> AdminActionLogResult:
    """Map ORM to application DTO."""
    return AdminActionLogResult(
        id=row.id,
        admin_id=row.admin_id,
        action=row.action,
        details=row.details,
        user_agent=row.user_agent,
        ip_address=row.ip_address,
        created_at=ensure_utc(row.created_at),
    )


class AdminActionLogRepository(BaseRepository[AdminActionLog]):
    """Append-only admin action log. No update/delete.

    Admin actions hand this repository its own session, separate from the
    doctor update; discard() rolls back a failed append on that session.
    """

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AdminActionLog)

    async def create(self, entry: AdminActionLogCreate) -> AdminActionLogResult:
        """Append one entry; return created record."""
        row = AdminActionLog(
            id=generate_cuid(),
            admin_id=entry.admin_id,
            action=entry.action,
            details=entry.details,
            user_agent=entry.user_agent,
            ip_address=entry.ip_address,
        )
        try:
            row = await self.insert(row)
        except IntegrityError as e:
            raise PersistenceException("admin_activity_logs.insert", type(e).__name__) from e
        return _orm_to_result(row)

    async def list(
        self,
        *,
        skip: int = 0,
        limit: int = 100,
        admin_id: str | None = None,
    ) -> list[AdminActionLogResult]:
        """List entries (newest first), optionally for one admin."""
        filters = []
        if admin_id is not None:
            filters.append(AdminActionLog.admin_id == admin_id)
        rows = await self.list_where(
            *filters,
            order_by=[AdminActionLog.created_at.desc()],
            skip=skip,
            limit=limit,
        )
        return [_orm_to_result(r) for r in rows]

    async def discard(self) -> None:
        """Roll back a failed append so the session commits nothing at teardown."""
        with store_errors("admin_activity_logs.rollback"):
            await self.db.rollback()
