"""Admin repository. Implements IAdminRepository."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from practice_access.application.dtos.admin import AdminResult
from practice_access.domain.exceptions import PersistenceException
from practice_access.infrastructure.persistence.models.admin import Admin
from practice_access.infrastructure.persistence.repositories.base import BaseRepository
from practice_access.shared.utils.datetime import ensure_utc


def _orm_to_result(row: Admin) -> AdminResult:
    return AdminResult(
        id=row.id,
        email=row.email,
        full_name=row.full_name,
        created_at=ensure_utc(row.created_at),
    )


class AdminRepository(BaseRepository[Admin]):
    """Administrators keyed by principal id."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Admin)

    async def get_by_id(self, admin_id: str) -> AdminResult | None:
        row = await self.find_one(Admin.id == admin_id)
        return _orm_to_result(row) if row else None

    async def list_all(self) -> list[AdminResult]:
        rows = await self.list_where(order_by=[Admin.created_at.asc()])
        return [_orm_to_result(r) for r in rows]

    async def create(
        self, admin_id: str, email: str, full_name: str | None = None
    ) -> AdminResult:
        try:
            row = await self.insert(
                Admin(id=admin_id, email=email.strip().lower(), full_name=full_name)
            )
        except IntegrityError as e:
            raise PersistenceException("admins.insert", "already exists") from e
        return _orm_to_result(row)
