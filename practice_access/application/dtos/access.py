"""DTOs for principals, role resolution, admin actions and the expiry sweep."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from practice_access.application.dtos.admin import AdminResult
from practice_access.application.dtos.doctor import DoctorAccountResult
from practice_access.domain.enums import AdminAction, PrincipalRole


@dataclass(frozen=True)
class Principal:
    """Authenticated identity supplied by the identity provider (opaque id + email)."""

    id: str
    email: str | None = None


@dataclass(frozen=True)
class RoleResolution:
    """Tagged outcome of role resolution. Never raised; callers branch on role."""

    role: PrincipalRole
    principal: Principal | None = None
    admin: AdminResult | None = None
    doctor: DoctorAccountResult | None = None
    error: str | None = None

    @property
    def is_authenticated(self) -> bool:
        """ERROR counts as unauthenticated (fail closed)."""
        return self.role not in (PrincipalRole.UNAUTHENTICATED, PrincipalRole.ERROR)


@dataclass(frozen=True)
class RequestMetadata:
    """Client metadata recorded with admin actions."""

    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True)
class AdminActionResult:
    """Result of an admin verification action.

    audit_logged=False means the state change was applied but the audit entry
    could not be written (degraded success; do not retry blindly).
    """

    doctor_id: str
    action: AdminAction
    updated_fields: dict[str, Any]
    audit_logged: bool = True
    audit_error: str | None = None


@dataclass(frozen=True)
class ReminderCandidate:
    """Active doctor whose next payment is due within the reminder window."""

    doctor_id: str
    email: str
    full_name: str
    days_until_payment: int
    next_payment_date: datetime


@dataclass(frozen=True)
class SweepResult:
    """Counts produced by one expiry sweep run."""

    expired_count: int
    reminder_count: int
    # None when the pending count could not be read; expiries still stand.
    pending_verification_count: int | None = 0
    reminders: list[ReminderCandidate] = field(default_factory=list)
