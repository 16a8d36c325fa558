"""Admin verification workflow API schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field

from practice_access.domain.enums import AdminAction
from practice_access.schemas.common import CamelModel


class VerifyPaymentRequest(CamelModel):
    """Body for POST /admin/verify-payment.

    admin_id is optional; the acting admin is always taken from the session.
    """

    doctor_id: str = Field(..., min_length=1)
    action: AdminAction
    admin_id: str | None = None


class VerifyPaymentResponse(CamelModel):
    """Result of an admin action. audit_logged=False means applied but not logged."""

    success: bool = True
    message: str
    updated_fields: dict[str, Any]
    audit_logged: bool = True
    audit_error: str | None = None


class AdminActionLogResponse(CamelModel):
    """One admin action log entry."""

    id: str
    admin_id: str
    action: str
    details: str
    user_agent: str | None = None
    ip_address: str | None = None
    created_at: datetime
