"""DTOs for doctor accounts (read-model and registration input)."""

from dataclasses import dataclass
from datetime import datetime

from practice_access.domain.entities.subscription import SubscriptionState
from practice_access.domain.enums import DoctorRole, SubscriptionStatus


@dataclass(frozen=True)
class DoctorProfile:
    """Profile fields supplied at registration. Not read by the access engine."""

    full_name: str
    cedula: str | None = None
    gender: str | None = None
    license_number: str | None = None
    specialty: str | None = None


@dataclass(frozen=True)
class DoctorCreate:
    """Input for inserting a doctor account (id is the principal id)."""

    id: str
    email: str
    profile: DoctorProfile
    subscription: SubscriptionState
    role: DoctorRole = DoctorRole.DOCTOR


@dataclass(frozen=True)
class DoctorAccountResult:
    """Doctor account (read-model)."""

    id: str
    email: str
    full_name: str
    role: DoctorRole
    subscription_status: SubscriptionStatus
    is_active: bool
    last_payment_date: datetime | None
    next_payment_date: datetime | None
    payment_proof_ref: str | None
    cedula: str | None = None
    gender: str | None = None
    license_number: str | None = None
    specialty: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def subscription(self) -> SubscriptionState:
        """Subscription fields as a domain state."""
        return SubscriptionState(
            subscription_status=self.subscription_status,
            is_active=self.is_active,
            last_payment_date=self.last_payment_date,
            next_payment_date=self.next_payment_date,
            payment_proof_ref=self.payment_proof_ref,
        )


@dataclass(frozen=True)
class SubscriptionSummary:
    """What the signed-in doctor sees about their subscription."""

    subscription_status: SubscriptionStatus
    is_active: bool
    last_payment_date: datetime | None
    next_payment_date: datetime | None
    payment_proof_ref: str | None
    days_until_payment: int | None
    reminder_due: bool
    is_exempt: bool


@dataclass(frozen=True)
class ProofUploadResult:
    """Outcome of a payment proof upload."""

    doctor: DoctorAccountResult
    payment_proof_ref: str
    auto_renewed: bool
    admins_notified: bool
