"""SubscriptionService tests: registration, proof uploads and the summary."""

from datetime import UTC, datetime, timedelta

import pytest

from practice_access.application.dtos.access import Principal, RoleResolution
from practice_access.application.dtos.doctor import DoctorProfile
from practice_access.application.services import ExemptionRegistry, SubscriptionService
from practice_access.domain.enums import NotificationKind, PrincipalRole, SubscriptionStatus
from practice_access.domain.exceptions import (
    AuthenticationException,
    DuplicateDoctorException,
    ValidationException,
)
from tests.fakes import (
    FIXED_NOW,
    FakeDoctorRepository,
    FakeExemptionRepository,
    FakeProofStore,
    RecordingNotifier,
    make_doctor,
)

PDF = b"%PDF-1.4 proof"


@pytest.fixture
def env():
    doctors = FakeDoctorRepository()
    exemptions = FakeExemptionRepository()
    proofs = FakeProofStore()
    notifier = RecordingNotifier()
    svc = SubscriptionService(
        doctors,
        ExemptionRegistry(exemptions),
        proofs,
        notifier,
        clock=lambda: FIXED_NOW,
    )
    return svc, doctors, exemptions, proofs, notifier


def _unknown(principal_id: str = "p1", email: str = "New.Doc@Example.com") -> RoleResolution:
    return RoleResolution(role=PrincipalRole.UNKNOWN, principal=Principal(principal_id, email))


async def test_exempt_registration_is_active_and_silent(env) -> None:
    svc, _, exemptions, _, notifier = env
    await exemptions.create("new.doc@example.com", "admin1")
    doctor = await svc.register(_unknown(), DoctorProfile(full_name="New Doc"))
    assert doctor.subscription_status == SubscriptionStatus.ACTIVE
    assert doctor.is_active is True
    assert doctor.last_payment_date == FIXED_NOW
    assert doctor.next_payment_date == FIXED_NOW + timedelta(days=30)
    assert doctor.email == "new.doc@example.com"
    assert notifier.admin_notifications == []


async def test_regular_registration_is_pending_and_notifies_admins(env) -> None:
    svc, _, _, _, notifier = env
    doctor = await svc.register(
        _unknown(), DoctorProfile(full_name="New Doc", specialty="Cardiology"), "p1/proof.pdf"
    )
    assert doctor.subscription_status == SubscriptionStatus.PENDING_VERIFICATION
    assert doctor.is_active is False
    assert doctor.payment_proof_ref == "p1/proof.pdf"
    assert doctor.specialty == "Cardiology"
    assert notifier.admin_notifications == [(NotificationKind.NEW_REGISTRATION, "p1")]


async def test_registration_when_exemption_lookup_fails_is_pending(env) -> None:
    svc, _, exemptions, _, _ = env
    await exemptions.create("new.doc@example.com", "admin1")
    exemptions.fail = True
    doctor = await svc.register(_unknown(), DoctorProfile(full_name="New Doc"))
    assert doctor.subscription_status == SubscriptionStatus.PENDING_VERIFICATION


async def test_registered_principal_cannot_register_again(env) -> None:
    svc = env[0]
    resolution = RoleResolution(
        role=PrincipalRole.DOCTOR, principal=Principal("doc1"), doctor=make_doctor("doc1")
    )
    with pytest.raises(DuplicateDoctorException):
        await svc.register(resolution, DoctorProfile(full_name="Again"))


async def test_registration_requires_session(env) -> None:
    with pytest.raises(AuthenticationException):
        await env[0].register(
            RoleResolution(role=PrincipalRole.UNAUTHENTICATED), DoctorProfile(full_name="X")
        )


async def test_registration_requires_name(env) -> None:
    with pytest.raises(ValidationException):
        await env[0].register(_unknown(), DoctorProfile(full_name="  "))


async def test_first_upload_goes_pending_and_notifies(env) -> None:
    svc, doctors, _, proofs, notifier = env
    doctor = make_doctor(status=SubscriptionStatus.PENDING_VERIFICATION, is_active=False)
    doctors.rows[doctor.id] = doctor
    result = await svc.upload_payment_proof(doctor, "receipt.pdf", "application/pdf", PDF)
    assert result.auto_renewed is False
    assert result.admins_notified is True
    assert result.doctor.subscription_status == SubscriptionStatus.PENDING_VERIFICATION
    assert result.doctor.last_payment_date is None
    assert result.doctor.payment_proof_ref == result.payment_proof_ref
    assert await proofs.list_proofs("doc1") == [result.payment_proof_ref]
    assert notifier.admin_notifications == [(NotificationKind.PAYMENT_UPLOADED, "doc1")]


async def test_renewal_inside_grace_window_is_automatic(env) -> None:
    svc, doctors, _, _, notifier = env
    last = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    doctor = make_doctor(last_payment_date=last, next_payment_date=last + timedelta(days=30))
    doctors.rows[doctor.id] = doctor
    result = await svc.upload_payment_proof(doctor, "receipt.png", "image/png", b"\x89PNG")
    assert result.auto_renewed is True
    assert result.admins_notified is False
    assert result.doctor.subscription_status == SubscriptionStatus.ACTIVE
    assert result.doctor.next_payment_date == datetime(2024, 2, 19, 12, 0, tzinfo=UTC)
    assert notifier.admin_notifications == []


async def test_expired_doctor_inside_grace_window_reactivates(env) -> None:
    svc, doctors, _, _, notifier = env
    doctor = make_doctor(
        status=SubscriptionStatus.EXPIRED,
        is_active=False,
        last_payment_date=datetime(2024, 1, 1, 12, 0, tzinfo=UTC),
    )
    doctors.rows[doctor.id] = doctor
    result = await svc.upload_payment_proof(doctor, "receipt.pdf", "application/pdf", PDF)
    assert result.auto_renewed is True
    assert result.doctor.subscription_status == SubscriptionStatus.ACTIVE
    assert result.doctor.is_active is True
    assert notifier.admin_notifications == []


@pytest.mark.parametrize(
    ("content_type", "data"),
    [
        ("text/plain", b"hello"),
        ("application/pdf", b""),
        ("application/pdf", b"x" * (5 * 1024 * 1024 + 1)),
    ],
    ids=["type", "empty", "too-large"],
)
async def test_invalid_proof_is_rejected_before_storing(env, content_type, data) -> None:
    svc, doctors, _, proofs, _ = env
    doctor = make_doctor()
    doctors.rows[doctor.id] = doctor
    with pytest.raises(ValidationException):
        await svc.upload_payment_proof(doctor, "f", content_type, data)
    assert await proofs.list_proofs("doc1") == []
    assert doctors.update_calls == 0


def test_validate_proof_normalizes_content_type(env) -> None:
    assert env[0].validate_proof("Application/PDF; charset=binary", 10) == "application/pdf"


async def test_remove_proof_keeps_status(env) -> None:
    svc, doctors, _, _, _ = env
    doctor = make_doctor(payment_proof_ref="doc1/p.pdf")
    doctors.rows[doctor.id] = doctor
    updated = await svc.remove_payment_proof(doctor)
    assert updated.payment_proof_ref is None
    assert updated.subscription_status == SubscriptionStatus.ACTIVE
    assert updated.is_active is True


async def test_summary_reports_days_until_payment(env) -> None:
    svc, _, exemptions, _, _ = env
    doctor = make_doctor(next_payment_date=FIXED_NOW + timedelta(days=2, hours=3))
    summary = await svc.summary(doctor)
    assert summary.days_until_payment == 3
    assert summary.reminder_due is True
    assert summary.is_exempt is False

    await exemptions.create("doc1@example.com", "admin1")
    far = make_doctor(next_payment_date=FIXED_NOW + timedelta(days=20))
    summary = await svc.summary(far)
    assert summary.reminder_due is False
    assert summary.is_exempt is True
