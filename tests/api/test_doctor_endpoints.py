"""Doctor endpoint tests: registration, subscription summary and payment proofs."""

from datetime import UTC, datetime, timedelta

from httpx import AsyncClient

from practice_access.domain.enums import NotificationKind, SubscriptionStatus
from tests.conftest import ADMIN_ID, bearer
from tests.fakes import make_doctor

PDF = ("receipt.pdf", b"%PDF-1.4 test", "application/pdf")


async def test_register_pending_and_admins_notified(client: AsyncClient, backend) -> None:
    response = await client.post(
        "/api/v1/doctors/register",
        data={"fullName": "Dr. New", "specialty": "Pediatrics"},
        headers=bearer("p1", "new@example.com"),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["id"] == "p1"
    assert body["subscriptionStatus"] == "pending_verification"
    assert body["isActive"] is False
    assert body["specialty"] == "Pediatrics"
    assert backend.notifier.admin_notifications == [(NotificationKind.NEW_REGISTRATION, "p1")]


async def test_register_with_proof(client: AsyncClient, backend) -> None:
    response = await client.post(
        "/api/v1/doctors/register",
        data={"fullName": "Dr. New"},
        files={"file": PDF},
        headers=bearer("p1", "new@example.com"),
    )
    assert response.status_code == 201
    ref = response.json()["paymentProofRef"]
    assert ref.startswith("p1/")
    assert await backend.proofs.list_proofs("p1") == [ref]


async def test_register_exempt_is_active(client: AsyncClient, backend) -> None:
    await backend.exemptions.create("friend@example.com", ADMIN_ID)
    response = await client.post(
        "/api/v1/doctors/register",
        data={"fullName": "Dr. Friend"},
        headers=bearer("p2", "Friend@Example.com"),
    )
    body = response.json()
    assert body["subscriptionStatus"] == "active"
    assert body["isActive"] is True
    assert backend.notifier.admin_notifications == []


async def test_register_twice_conflicts(client: AsyncClient, backend) -> None:
    backend.doctors.rows["doc1"] = make_doctor()
    response = await client.post(
        "/api/v1/doctors/register", data={"fullName": "Again"}, headers=bearer("doc1")
    )
    assert response.status_code == 409
    assert response.json()["error"] == "DUPLICATE_DOCTOR"


async def test_register_without_session(client: AsyncClient) -> None:
    response = await client.post("/api/v1/doctors/register", data={"fullName": "X"})
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


async def test_subscription_summary(client: AsyncClient, backend) -> None:
    next_payment = datetime.now(UTC) + timedelta(days=3, hours=1)
    backend.doctors.rows["doc1"] = make_doctor(next_payment_date=next_payment)
    response = await client.get("/api/v1/doctors/me/subscription", headers=bearer("doc1"))
    assert response.status_code == 200
    body = response.json()
    assert body["subscriptionStatus"] == "active"
    assert body["daysUntilPayment"] == 4
    assert body["reminderDue"] is True
    assert body["isExempt"] is False


async def test_unknown_principal_has_no_account(client: AsyncClient) -> None:
    response = await client.get("/api/v1/doctors/me", headers=bearer("stranger"))
    assert response.status_code == 403
    assert response.json()["error"] == "INTEGRITY_FAULT"


async def test_admin_is_not_a_doctor(client: AsyncClient) -> None:
    response = await client.get("/api/v1/doctors/me", headers=bearer(ADMIN_ID))
    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"


async def test_upload_first_proof_goes_to_review(client: AsyncClient, backend) -> None:
    backend.doctors.rows["doc1"] = make_doctor(
        status=SubscriptionStatus.PENDING_VERIFICATION, is_active=False
    )
    response = await client.post(
        "/api/v1/doctors/me/payment-proof", files={"file": PDF}, headers=bearer("doc1")
    )
    assert response.status_code == 200
    body = response.json()
    assert body["subscriptionStatus"] == "pending_verification"
    assert body["autoRenewed"] is False
    assert body["adminsNotified"] is True
    assert backend.doctors.rows["doc1"].payment_proof_ref == body["paymentProofRef"]


async def test_upload_inside_grace_window_renews(client: AsyncClient, backend) -> None:
    last = datetime.now(UTC) - timedelta(days=10)
    backend.doctors.rows["doc1"] = make_doctor(
        last_payment_date=last, next_payment_date=last + timedelta(days=30)
    )
    response = await client.post(
        "/api/v1/doctors/me/payment-proof", files={"file": PDF}, headers=bearer("doc1")
    )
    body = response.json()
    assert body["autoRenewed"] is True
    assert body["subscriptionStatus"] == "active"
    assert backend.notifier.admin_notifications == []


async def test_upload_rejects_unsupported_type(client: AsyncClient, backend) -> None:
    backend.doctors.rows["doc1"] = make_doctor()
    response = await client.post(
        "/api/v1/doctors/me/payment-proof",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=bearer("doc1"),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_remove_and_list_proofs(client: AsyncClient, backend) -> None:
    backend.doctors.rows["doc1"] = make_doctor(
        status=SubscriptionStatus.PENDING_VERIFICATION, is_active=False
    )
    await client.post(
        "/api/v1/doctors/me/payment-proof", files={"file": PDF}, headers=bearer("doc1")
    )
    listed = await client.get("/api/v1/doctors/me/payment-proofs", headers=bearer("doc1"))
    assert len(listed.json()["proofs"]) == 1
    removed = await client.delete("/api/v1/doctors/me/payment-proof", headers=bearer("doc1"))
    assert removed.status_code == 200
    assert removed.json()["paymentProofRef"] is None
    assert removed.json()["subscriptionStatus"] == "pending_verification"
