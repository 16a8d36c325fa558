"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain types only; no infrastructure imports.
Implementations translate driver errors into PersistenceException.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from practice_access.domain.enums import SubscriptionStatus

if TYPE_CHECKING:
    from practice_access.application.dtos.admin import AdminResult
    from practice_access.application.dtos.admin_action_log import (
        AdminActionLogCreate,
        AdminActionLogResult,
    )
    from practice_access.application.dtos.doctor import DoctorAccountResult, DoctorCreate
    from practice_access.application.dtos.exemption import ExemptionEntryResult
    from practice_access.domain.entities.subscription import SubscriptionPatch


# Admin repository interface
class IAdminRepository(Protocol):
    """Protocol for the admins record set (keyed by principal id)."""

    async def get_by_id(self, admin_id: str) -> AdminResult | None:
        """Return admin by principal id."""

    async def list_all(self) -> list[AdminResult]:
        """Return all admins (for notification recipients)."""

    async def create(
        self, admin_id: str, email: str, full_name: str | None = None
    ) -> AdminResult:
        """Insert an admin record."""


# Doctor repository interface
class IDoctorRepository(Protocol):
    """Protocol for the doctors record set (keyed by principal id)."""

    async def get_by_id(self, doctor_id: str) -> DoctorAccountResult | None:
        """Return doctor account by principal id."""

    async def create(self, data: DoctorCreate) -> DoctorAccountResult:
        """Insert a doctor account. Raises DuplicateDoctorException if the id exists."""

    async def apply_patch(
        self, doctor_id: str, patch: SubscriptionPatch
    ) -> DoctorAccountResult | None:
        """Write the patch in one UPDATE; return the updated row or None if not found."""

    async def list_by_status(
        self,
        status: SubscriptionStatus | None = None,
        *,
        skip: int = 0,
        limit: int = 100,
    ) -> list[DoctorAccountResult]:
        """Return doctors, optionally filtered by subscription_status (newest first)."""

    async def list_active(self) -> list[DoctorAccountResult]:
        """Return all doctors with subscription_status = active."""

    async def expire_active(self, doctor_ids: list[str], patch: SubscriptionPatch) -> int:
        """Batch-write patch to the given doctors that are still active; return rows changed."""

    async def count_pending_with_proof(self) -> int:
        """Return how many pending_verification doctors have a payment proof on file."""


# Exemption repository interface
class IExemptionRepository(Protocol):
    """Protocol for exempted_users (unique lowercase email)."""

    async def get_by_email(self, email: str) -> ExemptionEntryResult | None:
        """Return entry for an already-normalized email."""

    async def create(self, email: str, created_by: str) -> ExemptionEntryResult:
        """Insert entry. Raises DuplicateExemptionException on unique violation."""

    async def delete(self, entry_id: str) -> bool:
        """Delete entry by id; return False if not found."""

    async def list(self, *, skip: int = 0, limit: int = 100) -> list[ExemptionEntryResult]:
        """Return entries (newest first)."""


# Admin action log repository interface
class IAdminActionLogRepository(Protocol):
    """Protocol for admin action log. Append-only; no update or delete."""

    async def create(self, entry: AdminActionLogCreate) -> AdminActionLogResult:
        """Append one entry; return created record."""

    async def list(
        self,
        *,
        skip: int = 0,
        limit: int = 100,
        admin_id: str | None = None,
    ) -> list[AdminActionLogResult]:
        """Return entries (newest first), optionally for one admin."""

    async def discard(self) -> None:
        """Drop an uncommitted append after create failed."""
