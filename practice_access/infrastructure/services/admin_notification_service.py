"""Admin notification: log-only sender; recipients resolved from the admins table."""

from __future__ import annotations

import logging

from practice_access.application.dtos.access import ReminderCandidate
from practice_access.application.interfaces.repositories import IAdminRepository
from practice_access.domain.enums import NotificationKind
from practice_access.domain.exceptions import PracticeAccessException
from practice_access.shared.telemetry.logging import get_logger
from practice_access.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_SUBJECTS = {
    NotificationKind.NEW_REGISTRATION: "New doctor registration awaiting verification",
    NotificationKind.PAYMENT_UPLOADED: "New payment proof awaiting verification",
    NotificationKind.PAYMENT_REMINDER: "Your subscription payment is due soon",
}


class LogOnlyNotificationService:
    """INotificationService implementation that logs instead of sending email.

    Delivery problems (including failing to load recipients) are logged and
    reported as False; they never fail the action that triggered them.
    """

    def __init__(self, admin_repo: IAdminRepository) -> None:
        self.admin_repo = admin_repo

    async def notify_admins(
        self,
        kind: NotificationKind,
        doctor_id: str,
        doctor_name: str,
        doctor_email: str,
    ) -> bool:
        try:
            admins = await self.admin_repo.list_all()
        except PracticeAccessException as e:
            logger.warning("Admin notification %s not sent: %s", kind.value, e.message)
            return False
        recipients = [a.email for a in admins if a.email]
        if not recipients:
            logger.info(
                "Admin notify: no recipients, skipping %s for doctor %s", kind.value, doctor_id
            )
            return False
        logger.info(
            "Admin notify: would send %r to %d admins (doctor=%s)",
            _SUBJECTS[kind],
            len(recipients),
            doctor_id,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Admin notify recipients: %s; doctor %s <%s> (at %s)",
                recipients,
                doctor_name,
                doctor_email,
                utc_now().isoformat(),
            )
        return True

    async def send_payment_reminder(self, candidate: ReminderCandidate) -> bool:
        logger.info(
            "Payment reminder: would send %r to doctor %s (%d days left)",
            _SUBJECTS[NotificationKind.PAYMENT_REMINDER],
            candidate.doctor_id,
            candidate.days_until_payment,
        )
        return True
