"""Authentication endpoint tests."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from reading_tracker.core.exceptions import StorageError
from reading_tracker.models.user import RefreshToken, User
from reading_tracker.repositories.user_repo import UserRepository
from tests.conftest import TEST_PASSWORD


@pytest.mark.asyncio
async def test_register_user(client: AsyncClient):
    """Test user registration."""
    response = await client.post(
        "/v1/auth/register",
        json={
            "email": "newuser@example.com",
            "password": "securepassword123",
            "username": "newuser",
            "display_name": "New User",
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert "access_token" in data
    assert "refresh_token" in data
    assert data["token_type"] == "bearer"
    assert data["expires_in"] > 0


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, test_user):
    """Test registration with duplicate email fails."""
    response = await client.post(
        "/v1/auth/register",
        json={
            "email": test_user.email,
            "password": "securepassword123",
            "username": "differentuser",
            "display_name": "Different User",
        },
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


@pytest.mark.asyncio
@pytest.mark.parametrize("identifier", ["testuser@example.com", "testuser", "TestUser"])
async def test_login_with_email_or_username(client: AsyncClient, test_user, session_factory, identifier):
    """Login accepts either identifier and stamps the login time."""
    response = await client.post(
        "/v1/auth/login",
        json={"identifier": identifier, "password": TEST_PASSWORD},
    )

    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert "refresh_token" in data

    async with session_factory() as session:
        user = await session.get(User, test_user.id)
        assert user.last_login_at is not None


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, test_user):
    """Test login with wrong password fails."""
    response = await client.post(
        "/v1/auth/login",
        json={"identifier": test_user.email, "password": "wrongpassword"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_login_fails_when_token_issuance_fails(
    client: AsyncClient, test_user, session_factory, monkeypatch
):
    """A failure in either login task fails the login; no refresh token is stored."""

    def broken_token(*args, **kwargs):
        raise StorageError("signing backend unavailable")

    monkeypatch.setattr("reading_tracker.api.v1.auth.create_access_token", broken_token)

    response = await client.post(
        "/v1/auth/login",
        json={"identifier": "testuser", "password": TEST_PASSWORD},
    )

    assert response.status_code == 503

    async with session_factory() as session:
        tokens = (await session.execute(select(RefreshToken))).scalars().all()
        assert tokens == []


@pytest.mark.asyncio
async def test_login_fails_when_last_login_update_fails(client: AsyncClient, test_user, monkeypatch):
    async def broken_update(self, user_id):
        raise OperationalError("UPDATE users", {}, Exception("database is locked"))

    monkeypatch.setattr(UserRepository, "update_last_login", broken_update)

    response = await client.post(
        "/v1/auth/login",
        json={"identifier": "testuser", "password": TEST_PASSWORD},
    )

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "STORAGE_ERROR"


@pytest.mark.asyncio
async def test_refresh_rotates_token(client: AsyncClient, test_user):
    login = await client.post(
        "/v1/auth/login",
        json={"identifier": "testuser", "password": TEST_PASSWORD},
    )
    refresh_token = login.json()["refresh_token"]

    response = await client.post("/v1/auth/refresh", json={"refresh_token": refresh_token})
    assert response.status_code == 200
    assert response.json()["refresh_token"] != refresh_token

    # The old token was revoked by the rotation
    reused = await client.post("/v1/auth/refresh", json={"refresh_token": refresh_token})
    assert reused.status_code == 401


@pytest.mark.asyncio
async def test_logout_revokes_refresh_token(client: AsyncClient, test_user):
    login = await client.post(
        "/v1/auth/login",
        json={"identifier": "testuser", "password": TEST_PASSWORD},
    )
    refresh_token = login.json()["refresh_token"]

    response = await client.post("/v1/auth/logout", json={"refresh_token": refresh_token})
    assert response.status_code == 204

    response = await client.post("/v1/auth/refresh", json={"refresh_token": refresh_token})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_get_current_user(client: AsyncClient, test_user, auth_headers):
    """Test getting current user profile."""
    response = await client.get("/v1/users/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["username"] == "testuser"


@pytest.mark.asyncio
async def test_update_current_user(client: AsyncClient, test_user, auth_headers):
    response = await client.patch(
        "/v1/users/me",
        json={"biography": "Mostly seinen."},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["biography"] == "Mostly seinen."
    assert data["display_name"] == "Testuser"


@pytest.mark.asyncio
async def test_missing_token_is_unauthorized(client: AsyncClient):
    response = await client.get("/v1/users/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"
