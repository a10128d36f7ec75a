"""Admin endpoint tests."""

import uuid

import pytest
import pytest_asyncio
from httpx import AsyncClient

from tests.conftest import TEST_PASSWORD


@pytest_asyncio.fixture
async def reading_with_records(client: AsyncClient, auth_headers, book) -> tuple[dict, list[dict]]:
    reading = (
        await client.post(
            "/v1/readings",
            json={"reading_type": "book", "document_id": str(book.id)},
            headers=auth_headers,
        )
    ).json()
    records = []
    for progress in ("p.10", "p.20"):
        response = await client.post(
            f"/v1/readings/{reading['id']}/records",
            json={"progress": progress},
            headers=auth_headers,
        )
        records.append(response.json())
    return reading, records


@pytest.mark.asyncio
async def test_admin_reads_any_reading(client: AsyncClient, admin_headers, reading_with_records):
    reading, _ = reading_with_records

    response = await client.get(f"/v1/admin/readings/{reading['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert [r["progress"] for r in response.json()["records"]] == ["p.10", "p.20"]


@pytest.mark.asyncio
async def test_admin_lists_records(client: AsyncClient, admin_headers, reading_with_records):
    reading, records = reading_with_records

    response = await client.get(f"/v1/admin/readings/{reading['id']}/records", headers=admin_headers)

    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [r["id"] for r in records]


@pytest.mark.asyncio
async def test_admin_corrects_record(client: AsyncClient, admin_headers, auth_headers, reading_with_records):
    reading, records = reading_with_records

    response = await client.put(
        f"/v1/admin/readings/{reading['id']}/records/{records[0]['id']}",
        json={"progress": "p.12", "notes": "typo"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["progress"] == "p.12"

    owner_view = (await client.get(f"/v1/readings/{reading['id']}/records", headers=auth_headers)).json()
    assert [r["progress"] for r in owner_view] == ["p.12", "p.20"]


@pytest.mark.asyncio
async def test_admin_missing_reading(client: AsyncClient, admin_headers):
    response = await client.get(f"/v1/admin/readings/{uuid.uuid4()}", headers=admin_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_non_admin_is_forbidden(client: AsyncClient, auth_headers, reading_with_records):
    reading, _ = reading_with_records

    response = await client.get(f"/v1/admin/readings/{reading['id']}", headers=auth_headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_admin_gets_user(client: AsyncClient, admin_headers, test_user):
    response = await client.get(f"/v1/admin/users/{test_user.id}", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "testuser"
    assert data["roles"] == ["user"]
    assert data["status"] == "active"


@pytest.mark.asyncio
async def test_admin_missing_user(client: AsyncClient, admin_headers):
    get = await client.get(f"/v1/admin/users/{uuid.uuid4()}", headers=admin_headers)
    patch = await client.patch(
        f"/v1/admin/users/{uuid.uuid4()}",
        json={"status": "suspended"},
        headers=admin_headers,
    )
    delete = await client.delete(f"/v1/admin/users/{uuid.uuid4()}", headers=admin_headers)

    assert get.status_code == 404
    assert patch.status_code == 404
    assert delete.status_code == 404


@pytest.mark.asyncio
async def test_user_endpoints_need_admin(client: AsyncClient, auth_headers, other_user):
    get = await client.get(f"/v1/admin/users/{other_user.id}", headers=auth_headers)
    delete = await client.delete(f"/v1/admin/users/{other_user.id}", headers=auth_headers)

    assert get.status_code == 403
    assert delete.status_code == 403


@pytest.mark.asyncio
async def test_admin_grants_role(client: AsyncClient, admin_headers, auth_headers, test_user):
    response = await client.patch(
        f"/v1/admin/users/{test_user.id}",
        json={"roles": ["user", "admin"], "display_name": "Promoted"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["roles"] == ["user", "admin"]
    assert response.json()["display_name"] == "Promoted"

    response = await client.get(f"/v1/admin/users/{test_user.id}", headers=auth_headers)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_unknown_status_is_rejected(client: AsyncClient, admin_headers, test_user):
    response = await client.patch(
        f"/v1/admin/users/{test_user.id}",
        json={"status": "banished"},
        headers=admin_headers,
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_suspension_revokes_sessions(client: AsyncClient, admin_headers, test_user):
    login = await client.post(
        "/v1/auth/login",
        json={"identifier": "testuser", "password": TEST_PASSWORD},
    )
    tokens = login.json()
    user_headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    response = await client.patch(
        f"/v1/admin/users/{test_user.id}",
        json={"status": "suspended"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "suspended"

    response = await client.get("/v1/readings", headers=user_headers)
    assert response.status_code == 401

    # Reactivating does not bring back the refresh token issued before suspension
    await client.patch(
        f"/v1/admin/users/{test_user.id}",
        json={"status": "active"},
        headers=admin_headers,
    )
    response = await client.post("/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 401

    response = await client.get("/v1/readings", headers=user_headers)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_admin_deletes_user_and_their_data(
    client: AsyncClient, admin_headers, auth_headers, test_user, reading_with_records
):
    reading, _ = reading_with_records
    reading_list = (await client.post("/v1/reading-lists", json={"name": "Queue"}, headers=auth_headers)).json()
    await client.put(
        f"/v1/reading-lists/{reading_list['id']}/add-readings",
        json={"reading_ids": [reading["id"]]},
        headers=auth_headers,
    )

    response = await client.delete(f"/v1/admin/users/{test_user.id}", headers=admin_headers)
    assert response.status_code == 204

    response = await client.get(f"/v1/admin/users/{test_user.id}", headers=admin_headers)
    assert response.status_code == 404

    response = await client.get(f"/v1/admin/readings/{reading['id']}", headers=admin_headers)
    assert response.status_code == 404

    response = await client.get("/v1/readings", headers=auth_headers)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_admin_cannot_delete_self(client: AsyncClient, admin_headers, admin_user):
    response = await client.delete(f"/v1/admin/users/{admin_user.id}", headers=admin_headers)

    assert response.status_code == 403

    response = await client.get(f"/v1/admin/users/{admin_user.id}", headers=admin_headers)
    assert response.status_code == 200
