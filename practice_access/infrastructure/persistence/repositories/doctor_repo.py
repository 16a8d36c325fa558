"""Doctor repository. Implements IDoctorRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from practice_access.application.dtos.doctor import DoctorAccountResult, DoctorCreate
from practice_access.domain.entities.subscription import SubscriptionPatch
from practice_access.domain.enums import DoctorRole, SubscriptionStatus
from practice_access.domain.exceptions import DuplicateDoctorException
from practice_access.infrastructure.persistence.models.doctor import Doctor
from practice_access.infrastructure.persistence.repositories.base import (
    BaseRepository,
    store_errors,
)
from practice_access.shared.utils.datetime import ensure_utc


def _orm_to_result(row: Doctor) -> DoctorAccountResult:
    """Map ORM to application DTO."""
    return DoctorAccountResult(
        id=row.id,
        email=row.email,
        full_name=row.full_name,
        role=DoctorRole(row.role),
        subscription_status=SubscriptionStatus(row.subscription_status),
        is_active=row.is_active,
        last_payment_date=ensure_utc(row.last_payment_date),
        next_payment_date=ensure_utc(row.next_payment_date),
        payment_proof_ref=row.payment_proof_ref,
        cedula=row.cedula,
        gender=row.gender,
        license_number=row.license_number,
        specialty=row.specialty,
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )


def _patch_values(patch: SubscriptionPatch) -> dict[str, object]:
    """Column values for an UPDATE (enums stored by value)."""
    values: dict[str, object] = {}
    for key, value in patch.fields.items():
        values[key] = value.value if isinstance(value, SubscriptionStatus) else value
    return values


class DoctorRepository(BaseRepository[Doctor]):
    """Doctor accounts keyed by principal id."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Doctor)

    async def get_by_id(self, doctor_id: str) -> DoctorAccountResult | None:
        row = await self.find_one(Doctor.id == doctor_id)
        return _orm_to_result(row) if row else None

    async def create(self, data: DoctorCreate) -> DoctorAccountResult:
        state = data.subscription
        row = Doctor(
            id=data.id,
            email=data.email,
            full_name=data.profile.full_name.strip(),
            cedula=data.profile.cedula,
            gender=data.profile.gender,
            license_number=data.profile.license_number,
            specialty=data.profile.specialty,
            role=data.role.value,
            subscription_status=SubscriptionStatus(state.subscription_status).value,
            is_active=state.is_active,
            last_payment_date=state.last_payment_date,
            next_payment_date=state.next_payment_date,
            payment_proof_ref=state.payment_proof_ref,
        )
        try:
            row = await self.insert(row)
        except IntegrityError as e:
            raise DuplicateDoctorException(data.id) from e
        return _orm_to_result(row)

    async def apply_patch(
        self, doctor_id: str, patch: SubscriptionPatch
    ) -> DoctorAccountResult | None:
        rows = await self.update_where([Doctor.id == doctor_id], _patch_values(patch))
        return _orm_to_result(rows[0]) if rows else None

    async def list_by_status(
        self,
        status: SubscriptionStatus | None = None,
        *,
        skip: int = 0,
        limit: int = 100,
    ) -> list[DoctorAccountResult]:
        filters = []
        if status is not None:
            filters.append(Doctor.subscription_status == status.value)
        rows = await self.list_where(
            *filters, order_by=[Doctor.created_at.desc()], skip=skip, limit=limit
        )
        return [_orm_to_result(r) for r in rows]

    async def list_active(self) -> list[DoctorAccountResult]:
        rows = await self.list_where(
            Doctor.subscription_status == SubscriptionStatus.ACTIVE.value
        )
        return [_orm_to_result(r) for r in rows]

    async def expire_active(self, doctor_ids: list[str], patch: SubscriptionPatch) -> int:
        """Only rows still active are written, so concurrent sweeps expire each row once."""
        if not doctor_ids:
            return 0
        rows = await self.update_where(
            [
                Doctor.id.in_(doctor_ids),
                Doctor.subscription_status == SubscriptionStatus.ACTIVE.value,
            ],
            _patch_values(patch),
        )
        return len(rows)

    async def count_pending_with_proof(self) -> int:
        stmt = select(func.count()).select_from(Doctor).where(
            Doctor.subscription_status == SubscriptionStatus.PENDING_VERIFICATION.value,
            Doctor.payment_proof_ref.is_not(None),
        )
        with store_errors("doctors.count"):
            result = await self.db.execute(stmt)
            return int(result.scalar_one())
