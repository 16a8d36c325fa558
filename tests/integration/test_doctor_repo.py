"""Doctor and exemption repository integration tests. Require Postgres; session is rolled back after each test."""

from datetime import UTC, datetime

import pytest

from practice_access.application.dtos.doctor import DoctorCreate, DoctorProfile
from practice_access.domain.entities.subscription import SubscriptionStateMachine
from practice_access.domain.enums import AdminAction, SubscriptionStatus
from practice_access.domain.exceptions import (
    DuplicateDoctorException,
    DuplicateExemptionException,
)
from practice_access.infrastructure.persistence.repositories.doctor_repo import (
    DoctorRepository,
)
from practice_access.infrastructure.persistence.repositories.exemption_repo import (
    ExemptionRepository,
)

NOW = datetime(2024, 1, 20, 12, 0, tzinfo=UTC)
machine = SubscriptionStateMachine()


def _create(doctor_id: str, *, exempt: bool = False) -> DoctorCreate:
    return DoctorCreate(
        id=doctor_id,
        email=f"{doctor_id}@example.com",
        profile=DoctorProfile(full_name="Dr. Repo Test", specialty="cardiology"),
        subscription=machine.initial_state(NOW, exempt=exempt),
    )


@pytest.mark.requires_db
async def test_create_and_get_by_id(db_session) -> None:
    repo = DoctorRepository(db_session)
    created = await repo.create(_create("repo-doc-1"))
    assert created.subscription_status == SubscriptionStatus.PENDING_VERIFICATION
    assert created.is_active is False

    found = await repo.get_by_id("repo-doc-1")
    assert found is not None
    assert found.email == "repo-doc-1@example.com"
    assert found.specialty == "cardiology"


@pytest.mark.requires_db
async def test_duplicate_doctor_raises(db_session) -> None:
    repo = DoctorRepository(db_session)
    await repo.create(_create("repo-doc-dup"))
    db_session.expunge_all()
    with pytest.raises(DuplicateDoctorException):
        await repo.create(_create("repo-doc-dup"))


@pytest.mark.requires_db
async def test_apply_patch_writes_all_fields(db_session) -> None:
    repo = DoctorRepository(db_session)
    created = await repo.create(_create("repo-doc-2"))
    approved = machine.on_admin_action(created.subscription, AdminAction.APPROVE, NOW)
    updated = await repo.apply_patch("repo-doc-2", approved)
    assert updated is not None
    assert updated.subscription_status == SubscriptionStatus.ACTIVE
    assert updated.is_active is True
    assert updated.next_payment_date == datetime(2024, 2, 20, 12, 0, tzinfo=UTC)


@pytest.mark.requires_db
async def test_apply_patch_unknown_doctor_returns_none(db_session) -> None:
    repo = DoctorRepository(db_session)
    assert await repo.apply_patch("nope", machine.clear_proof_patch()) is None


@pytest.mark.requires_db
async def test_expire_active_only_touches_active_rows(db_session) -> None:
    repo = DoctorRepository(db_session)
    await repo.create(_create("repo-doc-active", exempt=True))
    await repo.create(_create("repo-doc-pending"))
    expired = await repo.expire_active(
        ["repo-doc-active", "repo-doc-pending"], machine.expiry_patch()
    )
    assert expired == 1
    again = await repo.expire_active(["repo-doc-active"], machine.expiry_patch())
    assert again == 0


@pytest.mark.requires_db
async def test_exemption_unique_email(db_session) -> None:
    repo = ExemptionRepository(db_session)
    entry = await repo.create("repo-vip@example.com", created_by="admin-x")
    assert (await repo.get_by_email("repo-vip@example.com")).id == entry.id
    with pytest.raises(DuplicateExemptionException):
        await repo.create("repo-vip@example.com", created_by="admin-x")

