"""Exemption repository (exempted_users). Implements IExemptionRepository."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from practice_access.application.dtos.exemption import ExemptionEntryResult
from practice_access.domain.exceptions import DuplicateExemptionException
from practice_access.infrastructure.persistence.models.exempted_user import ExemptedUser
from practice_access.infrastructure.persistence.repositories.base import BaseRepository
from practice_access.shared.utils.datetime import ensure_utc
from practice_access.shared.utils.generators import generate_cuid


def _orm_to_result(row: ExemptedUser) -> ExemptionEntryResult:
    return ExemptionEntryResult(
        id=row.id,
        email=row.email,
        created_by=row.created_by,
        created_at=ensure_utc(row.created_at),
    )


class ExemptionRepository(BaseRepository[ExemptedUser]):
    """Exempted emails. Callers pass emails already normalized to lowercase."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ExemptedUser)

    async def get_by_email(self, email: str) -> ExemptionEntryResult | None:
        row = await self.find_one(ExemptedUser.email == email)
        return _orm_to_result(row) if row else None

    async def create(self, email: str, created_by: str) -> ExemptionEntryResult:
        try:
            row = await self.insert(
                ExemptedUser(id=generate_cuid(), email=email, created_by=created_by)
            )
        except IntegrityError as e:
            raise DuplicateExemptionException(email) from e
        return _orm_to_result(row)

    async def delete(self, entry_id: str) -> bool:
        return await self.delete_where(ExemptedUser.id == entry_id) > 0

    async def list(self, *, skip: int = 0, limit: int = 100) -> list[ExemptionEntryResult]:
        rows = await self.list_where(
            order_by=[ExemptedUser.created_at.desc()], skip=skip, limit=limit
        )
        return [_orm_to_result(r) for r in rows]
