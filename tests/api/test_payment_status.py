"""Scheduled payment status endpoint tests."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

from httpx import AsyncClient

from practice_access.core.config import get_settings
from practice_access.domain.enums import SubscriptionStatus
from practice_access.domain.exceptions import PersistenceException
from tests.fakes import make_doctor


def _secret() -> dict[str, str]:
    return {"X-Scheduler-Secret": get_settings().scheduler_secret.get_secret_value()}


def _seed(backend) -> None:
    now = datetime.now(UTC)
    backend.doctors.rows["late"] = make_doctor(
        "late", email="late@example.com", next_payment_date=now - timedelta(days=3)
    )
    backend.doctors.rows["soon"] = make_doctor(
        "soon", email="soon@example.com", next_payment_date=now + timedelta(days=2)
    )


async def test_requires_secret(client: AsyncClient) -> None:
    missing = await client.post("/api/v1/check-payment-status")
    assert missing.status_code == 403
    wrong = await client.post(
        "/api/v1/check-payment-status", headers={"X-Scheduler-Secret": "nope"}
    )
    assert wrong.status_code == 403


async def test_sweep_counts_and_is_idempotent(client: AsyncClient, backend) -> None:
    _seed(backend)
    first = await client.post("/api/v1/check-payment-status", headers=_secret())
    assert first.status_code == 200
    body = first.json()
    assert body["expired"] == 1
    assert body["reminders"] == 1
    assert body["pendingVerification"] == 0
    assert body["reminderList"][0]["doctorId"] == "soon"
    assert backend.doctors.rows["late"].subscription_status == SubscriptionStatus.EXPIRED

    second = await client.post("/api/v1/check-payment-status", headers=_secret())
    assert second.json()["expired"] == 0


async def test_failed_pending_count_still_reports_expiries(client: AsyncClient, backend) -> None:
    _seed(backend)
    backend.doctors.count_pending_with_proof = AsyncMock(
        side_effect=PersistenceException("doctors.count", "timeout")
    )
    response = await client.post("/api/v1/check-payment-status", headers=_secret())
    assert response.status_code == 200
    body = response.json()
    assert body["expired"] == 1
    assert body["pendingVerification"] is None
    assert backend.doctors.rows["late"].subscription_status == SubscriptionStatus.EXPIRED
