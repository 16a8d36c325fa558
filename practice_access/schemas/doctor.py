"""Doctor account and subscription API schemas."""

from datetime import datetime

from practice_access.domain.enums import DoctorRole, SubscriptionStatus
from practice_access.schemas.common import CamelModel


class DoctorResponse(CamelModel):
    """Doctor account as seen by admins and by the doctor."""

    id: str
    email: str
    full_name: str
    role: DoctorRole
    subscription_status: SubscriptionStatus
    is_active: bool
    last_payment_date: datetime | None = None
    next_payment_date: datetime | None = None
    payment_proof_ref: str | None = None
    cedula: str | None = None
    gender: str | None = None
    license_number: str | None = None
    specialty: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SubscriptionSummaryResponse(CamelModel):
    """Response for GET /doctors/me/subscription."""

    subscription_status: SubscriptionStatus
    is_active: bool
    last_payment_date: datetime | None = None
    next_payment_date: datetime | None = None
    payment_proof_ref: str | None = None
    days_until_payment: int | None = None
    reminder_due: bool = False
    is_exempt: bool = False


class PaymentProofUploadResponse(CamelModel):
    """Response for POST /doctors/me/payment-proof."""

    payment_proof_ref: str
    subscription_status: SubscriptionStatus
    is_active: bool
    next_payment_date: datetime | None = None
    auto_renewed: bool
    admins_notified: bool


class PaymentProofListResponse(CamelModel):
    """Stored proofs for the signed-in doctor, newest first."""

    proofs: list[str]
