"""Pydantic request/response schemas for the API."""

from practice_access.schemas.access import AccessDecisionResponse, RoleResponse
from practice_access.schemas.admin import (
    AdminActionLogResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from practice_access.schemas.doctor import (
    DoctorResponse,
    PaymentProofListResponse,
    PaymentProofUploadResponse,
    SubscriptionSummaryResponse,
)
from practice_access.schemas.exemption import (
    ExemptionCheckRequest,
    ExemptionCheckResponse,
    ExemptionCreate,
    ExemptionEntryResponse,
)
from practice_access.schemas.health import HealthResponse, ReadinessResponse
from practice_access.schemas.payment_status import (
    PaymentStatusResponse,
    ReminderResponse,
)

__all__ = [
    "AccessDecisionResponse",
    "AdminActionLogResponse",
    "DoctorResponse",
    "ExemptionCheckRequest",
    "ExemptionCheckResponse",
    "ExemptionCreate",
    "ExemptionEntryResponse",
    "HealthResponse",
    "PaymentProofListResponse",
    "PaymentProofUploadResponse",
    "PaymentStatusResponse",
    "ReadinessResponse",
    "ReminderResponse",
    "RoleResponse",
    "SubscriptionSummaryResponse",
    "VerifyPaymentRequest",
    "VerifyPaymentResponse",
]
