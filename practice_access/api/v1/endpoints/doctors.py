"""Doctor API: registration, subscription summary and payment proofs."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from practice_access.api.v1.dependencies import (
    get_current_doctor,
    get_role_resolution,
    get_subscription_service,
)
from practice_access.application.dtos.access import RoleResolution
from practice_access.application.dtos.doctor import DoctorAccountResult, DoctorProfile
from practice_access.application.services import SubscriptionService, require_authenticated
from practice_access.core.limiter import limit_upload, limit_writes
from practice_access.schemas.doctor import (
    DoctorResponse,
    PaymentProofListResponse,
    PaymentProofUploadResponse,
    SubscriptionSummaryResponse,
)

router = APIRouter()


@router.post("/register", response_model=DoctorResponse, status_code=201)
@limit_writes
async def register_doctor(
    request: Request,
    resolution: Annotated[RoleResolution, Depends(get_role_resolution)],
    svc: Annotated[SubscriptionService, Depends(get_subscription_service)],
    full_name: str = Form(..., alias="fullName", min_length=1, max_length=255),
    cedula: str | None = Form(None),
    gender: str | None = Form(None),
    license_number: str | None = Form(None, alias="licenseNumber"),
    specialty: str | None = Form(None),
    file: UploadFile | None = File(None),
):
    """Create the doctor account for the signed-in principal.

    Exempt emails start active; everyone else starts pending verification.
    An optional payment proof can be attached.
    """
    principal = require_authenticated(resolution)
    proof_ref = None
    if file is not None and file.filename:
        data = await file.read()
        proof_ref = await svc.store_proof(principal.id, file.filename, file.content_type, data)
    doctor = await svc.register(
        resolution,
        DoctorProfile(
            full_name=full_name,
            cedula=cedula,
            gender=gender,
            license_number=license_number,
            specialty=specialty,
        ),
        payment_proof_ref=proof_ref,
    )
    return DoctorResponse.model_validate(doctor)


@router.get("/me", response_model=DoctorResponse)
async def get_my_account(
    doctor: Annotated[DoctorAccountResult, Depends(get_current_doctor)],
):
    """Return the signed-in doctor's account."""
    return DoctorResponse.model_validate(doctor)


@router.get("/me/subscription", response_model=SubscriptionSummaryResponse)
async def get_my_subscription(
    doctor: Annotated[DoctorAccountResult, Depends(get_current_doctor)],
    svc: Annotated[SubscriptionService, Depends(get_subscription_service)],
):
    """Subscription status, dates, days until payment and exemption."""
    summary = await svc.summary(doctor)
    return SubscriptionSummaryResponse.model_validate(summary)


@router.post("/me/payment-proof", response_model=PaymentProofUploadResponse)
@limit_upload
async def upload_payment_proof(
    request: Request,
    doctor: Annotated[DoctorAccountResult, Depends(get_current_doctor)],
    svc: Annotated[SubscriptionService, Depends(get_subscription_service)],
    file: UploadFile = File(...),
):
    """Upload a payment proof (PDF, JPG or PNG).

    Within the grace window an active account renews immediately; otherwise
    it goes to verification and admins are notified.
    """
    data = await file.read()
    result = await svc.upload_payment_proof(
        doctor, file.filename or "proof", file.content_type, data
    )
    return PaymentProofUploadResponse(
        payment_proof_ref=result.payment_proof_ref,
        subscription_status=result.doctor.subscription_status,
        is_active=result.doctor.is_active,
        next_payment_date=result.doctor.next_payment_date,
        auto_renewed=result.auto_renewed,
        admins_notified=result.admins_notified,
    )


@router.delete("/me/payment-proof", response_model=DoctorResponse)
@limit_writes
async def remove_payment_proof(
    request: Request,
    doctor: Annotated[DoctorAccountResult, Depends(get_current_doctor)],
    svc: Annotated[SubscriptionService, Depends(get_subscription_service)],
):
    """Clear the current proof reference; status and dates are unchanged."""
    updated = await svc.remove_payment_proof(doctor)
    return DoctorResponse.model_validate(updated)


@router.get("/me/payment-proofs", response_model=PaymentProofListResponse)
async def list_payment_proofs(
    doctor: Annotated[DoctorAccountResult, Depends(get_current_doctor)],
    svc: Annotated[SubscriptionService, Depends(get_subscription_service)],
):
    """Stored proofs for the signed-in doctor, newest first."""
    return PaymentProofListResponse(proofs=await svc.list_payment_proofs(doctor))
