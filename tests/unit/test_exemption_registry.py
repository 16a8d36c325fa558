"""ExemptionRegistry tests against the in-memory repository."""

import pytest

from practice_access.application.services.exemption_registry import (
    ExemptionRegistry,
    normalize_email,
)
from practice_access.domain.exceptions import (
    DuplicateExemptionException,
    PersistenceException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.fakes import FakeExemptionRepository


@pytest.fixture
def repo() -> FakeExemptionRepository:
    return FakeExemptionRepository()


def test_normalize_email() -> None:
    assert normalize_email("  Dr.House@Example.COM ") == "dr.house@example.com"


async def test_add_then_lookup_is_case_insensitive(repo) -> None:
    registry = ExemptionRegistry(repo)
    entry = await registry.add(" Friend@Clinic.org ", created_by="admin1")
    assert entry.email == "friend@clinic.org"
    assert entry.created_by == "admin1"
    assert (await registry.lookup("FRIEND@clinic.ORG")).id == entry.id
    assert await registry.is_exempt("friend@clinic.org") is True


async def test_remove_then_lookup_is_empty(repo) -> None:
    registry = ExemptionRegistry(repo)
    entry = await registry.add("friend@clinic.org", created_by="admin1")
    await registry.remove(entry.id)
    assert await registry.lookup("friend@clinic.org") is None
    assert await registry.is_exempt("friend@clinic.org") is False


async def test_duplicate_add_is_rejected(repo) -> None:
    registry = ExemptionRegistry(repo)
    await registry.add("friend@clinic.org", created_by="admin1")
    with pytest.raises(DuplicateExemptionException):
        await registry.add("FRIEND@clinic.org", created_by="admin2")


async def test_remove_missing_entry_raises_not_found(repo) -> None:
    with pytest.raises(ResourceNotFoundException):
        await ExemptionRegistry(repo).remove("nope")


@pytest.mark.parametrize("email", ["", "   ", "not-an-email"])
async def test_add_rejects_malformed_email(repo, email) -> None:
    with pytest.raises(ValidationException):
        await ExemptionRegistry(repo).add(email, created_by="admin1")


async def test_lookup_failure_propagates_but_is_exempt_fails_safe(repo) -> None:
    registry = ExemptionRegistry(repo)
    await registry.add("friend@clinic.org", created_by="admin1")
    repo.fail = True
    with pytest.raises(PersistenceException):
        await registry.lookup("friend@clinic.org")
    assert await registry.is_exempt("friend@clinic.org") is False


async def test_is_exempt_without_email(repo) -> None:
    assert await ExemptionRegistry(repo).is_exempt(None) is False
