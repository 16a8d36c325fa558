"""Scheduled expiry sweep API schemas."""

from datetime import datetime

from practice_access.schemas.common import CamelModel


class ReminderResponse(CamelModel):
    """Doctor due for a payment reminder."""

    doctor_id: str
    email: str
    days_until_payment: int
    next_payment_date: datetime


class PaymentStatusResponse(CamelModel):
    """Response for POST /check-payment-status."""

    expired: int
    reminders: int
    pending_verification: int | None = None
    reminder_list: list[ReminderResponse] = []
