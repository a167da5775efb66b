"""Tests for authentication endpoints."""

from httpx import AsyncClient

from app.core.security import create_access_token, create_refresh_token
from app.models.user import User
from tests.conftest import PASSWORD, auth_header


class TestLogin:
    """Tests for login endpoints."""

    async def test_login_success(self, client: AsyncClient, admin: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": admin.email, "password": PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["token_type"] == "bearer"

    async def test_login_wrong_password(self, client: AsyncClient, admin: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": admin.email, "password": "wrongpassword"},
        )

        assert response.status_code == 401
        assert "Incorrect email or password" in response.json()["detail"]

    async def test_login_nonexistent_user(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@acme.io", "password": PASSWORD},
        )
        assert response.status_code == 401

    async def test_login_invalid_email_format(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "not-an-email", "password": PASSWORD},
        )
        assert response.status_code == 422

    async def test_login_is_case_insensitive(self, client: AsyncClient, admin: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "  ADMIN@Acme.io ", "password": PASSWORD},
        )
        assert response.status_code == 200

    async def test_login_form(self, client: AsyncClient, admin: User):
        response = await client.post(
            "/api/v1/auth/login/form",
            data={"username": admin.email, "password": PASSWORD},
        )

        assert response.status_code == 200
        assert "access_token" in response.json()


class TestRefresh:
    """Tests for POST /auth/refresh endpoint."""

    async def test_refresh_success(self, client: AsyncClient, admin: User):
        refresh_token = create_refresh_token(data={"sub": str(admin.id)})

        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": refresh_token},
        )

        assert response.status_code == 200
        assert "access_token" in response.json()

    async def test_access_token_rejected_for_refresh(self, client: AsyncClient, admin: User):
        access_token = create_access_token(data={"sub": str(admin.id)})

        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": access_token},
        )
        assert response.status_code == 401

    async def test_refresh_token_rejected_for_access(self, client: AsyncClient, admin: User):
        refresh_token = create_refresh_token(data={"sub": str(admin.id)})

        response = await client.get("/api/v1/users/me", headers=auth_header(refresh_token))
        assert response.status_code == 401

    async def test_garbage_token(self, client: AsyncClient):
        response = await client.get("/api/v1/users/me", headers=auth_header("not-a-jwt"))
        assert response.status_code == 401
