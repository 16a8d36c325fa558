"""Run the expiry sweep: expire overdue active subscriptions and collect reminders."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from practice_access.application.dtos.access import ReminderCandidate, SweepResult
from practice_access.domain.entities.subscription import SubscriptionStateMachine
from practice_access.domain.exceptions import PracticeAccessException
from practice_access.shared.telemetry.tracing import add_span_attributes, traced
from practice_access.shared.utils.datetime import days_until, utc_now

if TYPE_CHECKING:
    from practice_access.application.interfaces.repositories import IDoctorRepository
    from practice_access.application.interfaces.services import INotificationService

logger = logging.getLogger(__name__)

REMINDER_WINDOW_DAYS = 5


class RunExpirySweepUseCase:
    """Batch pass over active doctors.

    daysUntilPayment = ceil((next_payment_date - now) / 1 day). Negative means
    overdue: the account is expired in one batch update restricted to rows that
    are still active, so re-running (or running concurrently) expires nothing
    twice. 0..REMINDER_WINDOW_DAYS means a reminder is dispatched; state is
    unchanged. Doctors without a next payment date are skipped.
    """

    def __init__(
        self,
        doctor_repo: "IDoctorRepository",
        notifier: "INotificationService | None" = None,
        state_machine: SubscriptionStateMachine | None = None,
        *,
        reminder_window_days: int = REMINDER_WINDOW_DAYS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._doctor_repo = doctor_repo
        self._notifier = notifier
        self._state_machine = state_machine or SubscriptionStateMachine()
        self._reminder_window_days = reminder_window_days
        self._clock = clock

    @traced("expiry_sweep.run")
    async def run(self) -> SweepResult:
        """Expire overdue accounts, dispatch reminders and return the counts."""
        now = self._clock()
        active = await self._doctor_repo.list_active()

        overdue_ids: list[str] = []
        reminders: list[ReminderCandidate] = []
        for doctor in active:
            if doctor.next_payment_date is None:
                continue
            remaining = days_until(doctor.next_payment_date, now)
            if remaining < 0:
                overdue_ids.append(doctor.id)
            elif remaining <= self._reminder_window_days:
                reminders.append(
                    ReminderCandidate(
                        doctor_id=doctor.id,
                        email=doctor.email,
                        full_name=doctor.full_name,
                        days_until_payment=remaining,
                        next_payment_date=doctor.next_payment_date,
                    )
                )

        expired_count = 0
        if overdue_ids:
            expired_count = await self._doctor_repo.expire_active(
                overdue_ids, self._state_machine.expiry_patch()
            )

        if self._notifier is not None:
            for candidate in reminders:
                await self._notifier.send_payment_reminder(candidate)

        pending: int | None
        try:
            pending = await self._doctor_repo.count_pending_with_proof()
        except PracticeAccessException as e:
            logger.error("Expiry sweep: pending verification count failed: %s", e.message)
            pending = None
        add_span_attributes(expired=expired_count, reminders=len(reminders))
        if pending is not None:
            add_span_attributes(pending=pending)
        logger.info(
            "Expiry sweep: scanned=%d expired=%d reminders=%d pending_with_proof=%s",
            len(active),
            expired_count,
            len(reminders),
            pending,
        )
        return SweepResult(
            expired_count=expired_count,
            reminder_count=len(reminders),
            pending_verification_count=pending,
            reminders=reminders,
        )
