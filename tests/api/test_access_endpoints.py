"""Pre-navigation and public-route guard endpoint tests."""

from httpx import AsyncClient

from practice_access.domain.enums import SubscriptionStatus
from tests.conftest import ADMIN_ID, bearer
from tests.fakes import make_doctor


async def test_check_without_session(client: AsyncClient) -> None:
    response = await client.get("/api/v1/access/check", params={"path": "/dashboard"})
    assert response.status_code == 200
    assert response.json() == {
        "allowed": False,
        "redirectTo": "/login",
        "signOut": False,
        "reason": "unauthenticated",
    }


async def test_check_matches_edge_decision_for_inactive_doctor(client: AsyncClient, backend) -> None:
    backend.doctors.rows["doc1"] = make_doctor(
        status=SubscriptionStatus.EXPIRED, is_active=False
    )
    response = await client.get(
        "/api/v1/access/check", params={"path": "/dashboard"}, headers=bearer("doc1")
    )
    body = response.json()
    assert body["allowed"] is False
    assert body["redirectTo"] == "/payment-required"


async def test_check_allows_active_doctor(client: AsyncClient, backend) -> None:
    backend.doctors.rows["doc1"] = make_doctor()
    response = await client.get(
        "/api/v1/access/check", params={"path": "/dashboard"}, headers=bearer("doc1")
    )
    assert response.json()["allowed"] is True


async def test_check_requires_path(client: AsyncClient) -> None:
    response = await client.get("/api/v1/access/check")
    assert response.status_code == 422


async def test_public_guard(client: AsyncClient, backend) -> None:
    anonymous = await client.get("/api/v1/access/public")
    assert anonymous.json()["allowed"] is True
    unknown = await client.get("/api/v1/access/public", headers=bearer("stranger"))
    assert unknown.json()["allowed"] is True
    admin = await client.get("/api/v1/access/public", headers=bearer(ADMIN_ID))
    assert admin.json()["redirectTo"] == "/admin"


async def test_me_reports_role(client: AsyncClient, backend) -> None:
    backend.doctors.rows["doc1"] = make_doctor()
    response = await client.get("/api/v1/access/me", headers=bearer("doc1"))
    assert response.json() == {
        "role": "doctor",
        "principalId": "doc1",
        "email": "doc1@example.com",
    }
    anonymous = await client.get("/api/v1/access/me")
    assert anonymous.json()["role"] == "unauthenticated"
