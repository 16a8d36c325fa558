"""Subscription state machine.

Pure transition rules for a doctor's subscription. Every transition returns a
SubscriptionPatch: a fully-specified field set that the caller writes in a
single update. Nothing here reads the clock or the record store; callers pass
``now`` and the current state explicitly.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any

from practice_access.domain.enums import AdminAction, SubscriptionStatus
from practice_access.domain.exceptions import InvalidTransitionException
from practice_access.shared.utils.datetime import add_months, ensure_utc

DEFAULT_GRACE_WINDOW_DAYS = 30
DEFAULT_RENEWAL_PERIOD_DAYS = 30


@dataclass(frozen=True)
class SubscriptionState:
    """Subscription fields of a doctor account.

    is_active is the access gate; subscription_status is a label that may
    transiently disagree with it. is_active=False always denies.
    """

    subscription_status: SubscriptionStatus
    is_active: bool
    last_payment_date: datetime | None = None
    next_payment_date: datetime | None = None
    payment_proof_ref: str | None = None

    def grants_access(self) -> bool:
        """Return True when the subscription alone lets the doctor in."""
        return self.is_active and self.subscription_status != SubscriptionStatus.EXPIRED


@dataclass(frozen=True)
class SubscriptionPatch:
    """Field set for one atomic update of the doctor account.

    Keys are column names; a key mapped to None clears that column.
    """

    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def subscription_status(self) -> SubscriptionStatus | None:
        return self.fields.get("subscription_status")

    @property
    def is_active(self) -> bool | None:
        return self.fields.get("is_active")

    def apply(self, state: SubscriptionState) -> SubscriptionState:
        """Return the state after this patch is written."""
        return replace(state, **self.fields)

    def requires_review(self) -> bool:
        """True when the patch leaves the account waiting for an administrator."""
        return self.subscription_status == SubscriptionStatus.PENDING_VERIFICATION


class SubscriptionStateMachine:
    """Transition rules for registration, proof uploads, admin decisions and expiry.

    Args:
        grace_window_days: A renewal at most this long after the last payment
            auto-renews (boundary inclusive).
        renewal_period_days: Length of a renewed period.
    """

    def __init__(
        self,
        grace_window_days: int = DEFAULT_GRACE_WINDOW_DAYS,
        renewal_period_days: int = DEFAULT_RENEWAL_PERIOD_DAYS,
    ) -> None:
        self.grace_window = timedelta(days=grace_window_days)
        self.renewal_period = timedelta(days=renewal_period_days)

    def initial_state(
        self,
        now: datetime,
        *,
        exempt: bool,
        payment_proof_ref: str | None = None,
    ) -> SubscriptionState:
        """State of a newly registered doctor.

        Exempt emails start active with a paid period; everyone else waits for review.
        """
        if exempt:
            return SubscriptionState(
                subscription_status=SubscriptionStatus.ACTIVE,
                is_active=True,
                last_payment_date=now,
                next_payment_date=now + self.renewal_period,
                payment_proof_ref=payment_proof_ref,
            )
        return SubscriptionState(
            subscription_status=SubscriptionStatus.PENDING_VERIFICATION,
            is_active=False,
            payment_proof_ref=payment_proof_ref,
        )

    def within_grace_window(self, last_payment_date: datetime | None, now: datetime) -> bool:
        """True when now is at most grace_window after the last payment."""
        if last_payment_date is None:
            return False
        return ensure_utc(now) - ensure_utc(last_payment_date) <= self.grace_window

    def on_proof_uploaded(
        self,
        state: SubscriptionState,
        now: datetime,
        payment_proof_ref: str,
    ) -> SubscriptionPatch:
        """Transition for a newly uploaded payment proof.

        - First-ever payment: pending review, dates untouched.
        - Last payment inside the grace window: auto-renew (active, dates
          advanced), whatever the current status. An expired or pending
          account re-enters active this way.
        - Late renewal: pending review with is_active=False; dates advanced.
        """
        if state.last_payment_date is None:
            return SubscriptionPatch(
                {
                    "subscription_status": SubscriptionStatus.PENDING_VERIFICATION,
                    "is_active": False,
                    "payment_proof_ref": payment_proof_ref,
                }
            )
        if self.within_grace_window(state.last_payment_date, now):
            return SubscriptionPatch(
                {
                    "subscription_status": SubscriptionStatus.ACTIVE,
                    "is_active": True,
                    "last_payment_date": now,
                    "next_payment_date": now + self.renewal_period,
                    "payment_proof_ref": payment_proof_ref,
                }
            )
        return SubscriptionPatch(
            {
                "subscription_status": SubscriptionStatus.PENDING_VERIFICATION,
                "is_active": False,
                "last_payment_date": now,
                "next_payment_date": now + self.renewal_period,
                "payment_proof_ref": payment_proof_ref,
            }
        )

    def on_admin_action(
        self,
        state: SubscriptionState,
        action: AdminAction,
        now: datetime,
    ) -> SubscriptionPatch:
        """Transition for an administrator decision.

        Raises:
            InvalidTransitionException: approve/reject on a doctor that is not
                pending verification.
        """
        if action in (AdminAction.APPROVE, AdminAction.REJECT):
            if state.subscription_status != SubscriptionStatus.PENDING_VERIFICATION:
                raise InvalidTransitionException(
                    action.value, SubscriptionStatus(state.subscription_status).value
                )
        if action == AdminAction.APPROVE:
            return SubscriptionPatch(
                {
                    "subscription_status": SubscriptionStatus.ACTIVE,
                    "is_active": True,
                    "last_payment_date": now,
                    "next_payment_date": add_months(now, 1),
                }
            )
        if action == AdminAction.REJECT:
            return SubscriptionPatch(
                {
                    "subscription_status": SubscriptionStatus.EXPIRED,
                    "is_active": False,
                    "payment_proof_ref": None,
                }
            )
        if action == AdminAction.ACTIVATE:
            return SubscriptionPatch(
                {"subscription_status": SubscriptionStatus.ACTIVE, "is_active": True}
            )
        if action == AdminAction.DEACTIVATE:
            return SubscriptionPatch(
                {"subscription_status": SubscriptionStatus.EXPIRED, "is_active": False}
            )
        raise ValueError(f"Unknown admin action: {action!r}")

    def expiry_patch(self) -> SubscriptionPatch:
        """Field set written by the expiry sweep for overdue accounts."""
        return SubscriptionPatch(
            {"subscription_status": SubscriptionStatus.EXPIRED, "is_active": False}
        )

    @staticmethod
    def clear_proof_patch() -> SubscriptionPatch:
        """Field set for a doctor removing their payment proof (status unchanged)."""
        return SubscriptionPatch({"payment_proof_ref": None})
