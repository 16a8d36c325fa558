"""Scheduled payment status check: runs the expiry sweep.

Called by an external scheduler with the shared X-Scheduler-Secret header.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from practice_access.api.v1.dependencies import get_expiry_sweep, verify_scheduler_secret
from practice_access.application.use_cases import RunExpirySweepUseCase
from practice_access.core.limiter import limit_scheduler
from practice_access.schemas.payment_status import PaymentStatusResponse, ReminderResponse

router = APIRouter()


@router.post(
    "/check-payment-status",
    response_model=PaymentStatusResponse,
    dependencies=[Depends(verify_scheduler_secret)],
)
@limit_scheduler
async def check_payment_status(
    request: Request,
    sweep: Annotated[RunExpirySweepUseCase, Depends(get_expiry_sweep)],
):
    """Expire overdue accounts and dispatch reminders. Safe to re-run."""
    result = await sweep.run()
    return PaymentStatusResponse(
        expired=result.expired_count,
        reminders=result.reminder_count,
        pending_verification=result.pending_verification_count,
        reminder_list=[
            ReminderResponse(
                doctor_id=r.doctor_id,
                email=r.email,
                days_until_payment=r.days_until_payment,
                next_payment_date=r.next_payment_date,
            )
            for r in result.reminders
        ],
    )
