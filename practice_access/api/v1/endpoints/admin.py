"""Admin API: payment verification actions, doctor queue and the action log."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from pydantic.alias_generators import to_camel

from practice_access.api.v1.dependencies import (
    get_admin_read_service,
    get_admin_verification_service,
    require_admin_resolution,
)
from practice_access.application.dtos.access import RoleResolution
from practice_access.application.services import AdminVerificationService
from practice_access.core.limiter import limit_writes
from practice_access.domain.enums import AdminAction, SubscriptionStatus
from practice_access.domain.exceptions import AuthorizationException
from practice_access.schemas.admin import (
    AdminActionLogResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from practice_access.schemas.doctor import DoctorResponse
from practice_access.shared.request_audit import get_request_metadata

router = APIRouter()

_ACTION_MESSAGES = {
    AdminAction.APPROVE: "Payment approved",
    AdminAction.REJECT: "Payment rejected",
    AdminAction.ACTIVATE: "Account activated",
    AdminAction.DEACTIVATE: "Account deactivated",
}


@router.post("/verify-payment", response_model=VerifyPaymentResponse)
@limit_writes
async def verify_payment(
    request: Request,
    body: VerifyPaymentRequest,
    resolution: Annotated[RoleResolution, Depends(require_admin_resolution)],
    svc: Annotated[AdminVerificationService, Depends(get_admin_verification_service)],
):
    """Approve, reject, activate or deactivate a doctor's subscription.

    The acting admin is the session principal; a body adminId naming anyone
    else is rejected. auditLogged=false means the change was applied but the
    action log entry could not be written.
    """
    assert resolution.principal is not None
    if body.admin_id is not None and body.admin_id != resolution.principal.id:
        raise AuthorizationException(
            action=body.action.value, message="adminId does not match the signed-in admin"
        )
    result = await svc.perform_action(
        resolution,
        doctor_id=body.doctor_id,
        action=body.action,
        metadata=get_request_metadata(request),
    )
    message = _ACTION_MESSAGES[result.action]
    if not result.audit_logged:
        message += " (action log entry could not be written)"
    return VerifyPaymentResponse(
        success=True,
        message=message,
        updated_fields={to_camel(k): v for k, v in result.updated_fields.items()},
        audit_logged=result.audit_logged,
        audit_error=result.audit_error,
    )


@router.get("/doctors", response_model=list[DoctorResponse])
async def list_doctors(
    _: Annotated[RoleResolution, Depends(require_admin_resolution)],
    svc: Annotated[AdminVerificationService, Depends(get_admin_read_service)],
    status: SubscriptionStatus | None = Query(None, description="e.g. pending_verification"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List doctors, optionally by subscription status (admin only)."""
    doctors = await svc.list_doctors(status, skip=skip, limit=limit)
    return [DoctorResponse.model_validate(d) for d in doctors]


@router.get("/doctors/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(
    doctor_id: str,
    _: Annotated[RoleResolution, Depends(require_admin_resolution)],
    svc: Annotated[AdminVerificationService, Depends(get_admin_read_service)],
):
    """Get one doctor (admin only). 404 if absent."""
    return DoctorResponse.model_validate(await svc.get_doctor(doctor_id))


@router.get("/action-log", response_model=list[AdminActionLogResponse])
async def list_action_log(
    _: Annotated[RoleResolution, Depends(require_admin_resolution)],
    svc: Annotated[AdminVerificationService, Depends(get_admin_read_service)],
    admin_id: str | None = Query(None, alias="adminId"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """Admin action log, newest first (admin only)."""
    entries = await svc.list_action_log(skip=skip, limit=limit, admin_id=admin_id)
    return [AdminActionLogResponse.model_validate(e) for e in entries]
