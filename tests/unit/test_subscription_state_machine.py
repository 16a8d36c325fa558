"""SubscriptionStateMachine transition tests (pure, fixed clock)."""

from datetime import UTC, datetime, timedelta

import pytest

from practice_access.domain.entities.subscription import (
    SubscriptionState,
    SubscriptionStateMachine,
)
from practice_access.domain.enums import AdminAction, SubscriptionStatus
from practice_access.domain.exceptions import InvalidTransitionException

NOW = datetime(2024, 1, 20, 12, 0, tzinfo=UTC)


@pytest.fixture
def sm() -> SubscriptionStateMachine:
    return SubscriptionStateMachine()


def _active(last_payment: datetime) -> SubscriptionState:
    return SubscriptionState(
        subscription_status=SubscriptionStatus.ACTIVE,
        is_active=True,
        last_payment_date=last_payment,
        next_payment_date=last_payment + timedelta(days=30),
        payment_proof_ref="doc1/old.pdf",
    )


def _pending(last_payment: datetime | None = None) -> SubscriptionState:
    return SubscriptionState(
        subscription_status=SubscriptionStatus.PENDING_VERIFICATION,
        is_active=False,
        last_payment_date=last_payment,
        payment_proof_ref="doc1/p.pdf",
    )


def test_exempt_registration_starts_active_with_paid_period(sm) -> None:
    state = sm.initial_state(NOW, exempt=True)
    assert state.subscription_status == SubscriptionStatus.ACTIVE
    assert state.is_active is True
    assert state.last_payment_date == NOW
    assert state.next_payment_date == NOW + timedelta(days=30)


def test_regular_registration_waits_for_review(sm) -> None:
    state = sm.initial_state(NOW, exempt=False, payment_proof_ref="p1/proof.pdf")
    assert state.subscription_status == SubscriptionStatus.PENDING_VERIFICATION
    assert state.is_active is False
    assert state.last_payment_date is None
    assert state.next_payment_date is None
    assert state.payment_proof_ref == "p1/proof.pdf"


def test_upload_inside_grace_window_auto_renews(sm) -> None:
    """Last payment 2024-01-01, upload 2024-01-20: renewed until 2024-02-19."""
    state = _active(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))
    patch = sm.on_proof_uploaded(state, NOW, "doc1/new.pdf")
    after = patch.apply(state)
    assert after.subscription_status == SubscriptionStatus.ACTIVE
    assert after.is_active is True
    assert after.last_payment_date == NOW
    assert after.next_payment_date == datetime(2024, 2, 19, 12, 0, tzinfo=UTC)
    assert after.payment_proof_ref == "doc1/new.pdf"
    assert patch.requires_review() is False


def test_grace_window_boundary_is_inclusive(sm) -> None:
    state = _active(NOW - timedelta(days=30))
    patch = sm.on_proof_uploaded(state, NOW, "doc1/new.pdf")
    assert patch.subscription_status == SubscriptionStatus.ACTIVE
    assert patch.is_active is True


def test_one_second_past_grace_window_goes_to_review(sm) -> None:
    state = _active(NOW - timedelta(days=30, seconds=1))
    patch = sm.on_proof_uploaded(state, NOW, "doc1/new.pdf")
    after = patch.apply(state)
    assert after.subscription_status == SubscriptionStatus.PENDING_VERIFICATION
    assert after.is_active is False
    assert after.last_payment_date == NOW
    assert after.next_payment_date == NOW + timedelta(days=30)
    assert patch.requires_review() is True


def test_first_upload_goes_to_review_without_touching_dates(sm) -> None:
    state = _pending()
    patch = sm.on_proof_uploaded(state, NOW, "doc1/first.pdf")
    assert patch.requires_review() is True
    assert "last_payment_date" not in patch.fields
    assert "next_payment_date" not in patch.fields
    assert patch.apply(state).payment_proof_ref == "doc1/first.pdf"


@pytest.mark.parametrize(
    "state",
    [
        _pending(datetime(2024, 1, 1, tzinfo=UTC)),
        SubscriptionState(SubscriptionStatus.EXPIRED, False, datetime(2024, 1, 1, tzinfo=UTC)),
        SubscriptionState(SubscriptionStatus.ACTIVE, False, datetime(2024, 1, 1, tzinfo=UTC)),
    ],
    ids=["pending", "expired", "deactivated"],
)
def test_upload_inside_grace_window_reactivates_any_status(sm, state) -> None:
    patch = sm.on_proof_uploaded(state, NOW, "doc1/new.pdf")
    after = patch.apply(state)
    assert after.subscription_status == SubscriptionStatus.ACTIVE
    assert after.is_active is True
    assert after.last_payment_date == NOW
    assert patch.requires_review() is False


def test_late_upload_on_expired_account_goes_to_review(sm) -> None:
    state = SubscriptionState(SubscriptionStatus.EXPIRED, False, NOW - timedelta(days=45))
    patch = sm.on_proof_uploaded(state, NOW, "doc1/new.pdf")
    assert patch.subscription_status == SubscriptionStatus.PENDING_VERIFICATION
    assert patch.is_active is False


def test_approve_activates_for_one_calendar_month(sm) -> None:
    patch = sm.on_admin_action(_pending(), AdminAction.APPROVE, NOW)
    assert patch.fields == {
        "subscription_status": SubscriptionStatus.ACTIVE,
        "is_active": True,
        "last_payment_date": NOW,
        "next_payment_date": datetime(2024, 2, 20, 12, 0, tzinfo=UTC),
    }


def test_approve_on_jan_31_clamps_to_end_of_february(sm) -> None:
    now = datetime(2024, 1, 31, 9, 0, tzinfo=UTC)
    patch = sm.on_admin_action(_pending(), AdminAction.APPROVE, now)
    assert patch.fields["next_payment_date"] == datetime(2024, 2, 29, 9, 0, tzinfo=UTC)


def test_reject_expires_and_clears_proof(sm) -> None:
    patch = sm.on_admin_action(_pending(), AdminAction.REJECT, NOW)
    after = patch.apply(_pending())
    assert after.subscription_status == SubscriptionStatus.EXPIRED
    assert after.is_active is False
    assert after.payment_proof_ref is None


@pytest.mark.parametrize("action", [AdminAction.APPROVE, AdminAction.REJECT])
def test_approve_and_reject_require_pending_verification(sm, action) -> None:
    with pytest.raises(InvalidTransitionException) as exc_info:
        sm.on_admin_action(_active(NOW - timedelta(days=2)), action, NOW)
    assert exc_info.value.details["current_status"] == "active"


def test_activate_and_deactivate_apply_from_any_state(sm) -> None:
    expired = SubscriptionState(SubscriptionStatus.EXPIRED, False)
    activated = sm.on_admin_action(expired, AdminAction.ACTIVATE, NOW).apply(expired)
    assert activated.subscription_status == SubscriptionStatus.ACTIVE
    assert activated.is_active is True
    deactivated = sm.on_admin_action(activated, AdminAction.DEACTIVATE, NOW).apply(activated)
    assert deactivated.subscription_status == SubscriptionStatus.EXPIRED
    assert deactivated.is_active is False


def test_expiry_patch_and_clear_proof_patch(sm) -> None:
    assert sm.expiry_patch().fields == {
        "subscription_status": SubscriptionStatus.EXPIRED,
        "is_active": False,
    }
    assert sm.clear_proof_patch().fields == {"payment_proof_ref": None}


@pytest.mark.parametrize("status", list(SubscriptionStatus))
def test_inactive_account_never_grants_access(status) -> None:
    assert SubscriptionState(status, False).grants_access() is False


def test_custom_grace_window() -> None:
    sm = SubscriptionStateMachine(grace_window_days=7, renewal_period_days=14)
    state = _active(NOW - timedelta(days=8))
    assert sm.on_proof_uploaded(state, NOW, "x").requires_review() is True
    renewed = sm.on_proof_uploaded(_active(NOW - timedelta(days=7)), NOW, "x")
    assert renewed.fields["next_payment_date"] == NOW + timedelta(days=14)
