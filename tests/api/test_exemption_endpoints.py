"""Exemption endpoint tests: public check and admin management."""

from httpx import AsyncClient

from tests.conftest import ADMIN_ID, bearer
from tests.fakes import make_doctor


async def test_check_unknown_email(client: AsyncClient) -> None:
    response = await client.post("/api/v1/check-exemption", json={"email": "who@example.com"})
    assert response.status_code == 200
    assert response.json() == {"isExempted": False, "exemptionData": None}


async def test_admin_manages_exemptions(client: AsyncClient) -> None:
    created = await client.post(
        "/api/v1/admin/exemptions", json={"email": "VIP@Clinic.org"}, headers=bearer(ADMIN_ID)
    )
    assert created.status_code == 201
    entry = created.json()
    assert entry["email"] == "vip@clinic.org"
    assert entry["createdBy"] == ADMIN_ID

    check = await client.post("/api/v1/check-exemption", json={"email": " vip@CLINIC.org "})
    assert check.json()["isExempted"] is True
    assert check.json()["exemptionData"]["id"] == entry["id"]

    duplicate = await client.post(
        "/api/v1/admin/exemptions", json={"email": "vip@clinic.org"}, headers=bearer(ADMIN_ID)
    )
    assert duplicate.status_code == 409

    listed = await client.get("/api/v1/admin/exemptions", headers=bearer(ADMIN_ID))
    assert [e["email"] for e in listed.json()] == ["vip@clinic.org"]

    deleted = await client.delete(
        f"/api/v1/admin/exemptions/{entry['id']}", headers=bearer(ADMIN_ID)
    )
    assert deleted.status_code == 204
    again = await client.delete(f"/api/v1/admin/exemptions/{entry['id']}", headers=bearer(ADMIN_ID))
    assert again.status_code == 404
    check = await client.post("/api/v1/check-exemption", json={"email": "vip@clinic.org"})
    assert check.json()["isExempted"] is False


async def test_doctor_cannot_add_exemption(client: AsyncClient, backend) -> None:
    backend.doctors.rows["doc1"] = make_doctor()
    response = await client.post(
        "/api/v1/admin/exemptions", json={"email": "me@example.com"}, headers=bearer("doc1")
    )
    assert response.status_code == 403
    assert backend.exemptions.rows == {}


async def test_check_surfaces_store_failure(client: AsyncClient, backend) -> None:
    backend.exemptions.fail = True
    response = await client.post("/api/v1/check-exemption", json={"email": "a@example.com"})
    assert response.status_code == 503
