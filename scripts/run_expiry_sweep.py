"""Run the expiry sweep once: expire overdue accounts and log reminders.

Usage:
    uv run python -m scripts.run_expiry_sweep
Same work as POST /api/v1/check-payment-status, for cron without HTTP.
Safe to re-run; a second run expires nothing.
"""

import asyncio

import practice_access.infrastructure.persistence.database as database
from practice_access.application.use_cases import RunExpirySweepUseCase
from practice_access.core.config import get_settings
from practice_access.domain.entities.subscription import SubscriptionStateMachine
from practice_access.infrastructure.persistence.repositories import (
    AdminRepository,
    DoctorRepository,
)
from practice_access.infrastructure.services import LogOnlyNotificationService
from practice_access.shared.telemetry import setup_logging


async def main() -> None:
    """Run one sweep in a single transaction and print the counts."""
    settings = get_settings()
    setup_logging()
    try:
        async with database.session_scope(transactional=True) as session:
            sweep = RunExpirySweepUseCase(
                DoctorRepository(session),
                LogOnlyNotificationService(AdminRepository(session)),
                SubscriptionStateMachine(
                    grace_window_days=settings.grace_window_days,
                    renewal_period_days=settings.renewal_period_days,
                ),
                reminder_window_days=settings.reminder_window_days,
            )
            result = await sweep.run()
    finally:
        await database.dispose_engine()

    print(
        f"expired={result.expired_count} reminders={result.reminder_count} "
        f"pending_verification={result.pending_verification_count}"
    )


if __name__ == "__main__":
    asyncio.run(main())
