"""Tests for user endpoints."""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.tenant import Tenant
from app.models.user import User
from tests.conftest import PASSWORD, auth_header


def new_user(email: str, **extra) -> dict:
    payload = {
        "email": email,
        "password": PASSWORD,
        "first_name": "New",
        "last_name": "Agent",
    }
    payload.update(extra)
    return payload


class TestGetMe:
    """Tests for GET /users/me endpoint."""

    async def test_get_me_success(self, client: AsyncClient, sales: User, sales_token):
        response = await client.get("/api/v1/users/me", headers=auth_header(sales_token))

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "sales@acme.io"
        assert data["role"] == "sales"
        assert data["tenant_id"] == str(sales.tenant_id)
        assert data["supervisor_id"] == str(sales.supervisor_id)

    async def test_get_me_unauthorized(self, client: AsyncClient):
        response = await client.get("/api/v1/users/me")
        assert response.status_code == 401

    async def test_inactive_user_rejected(
        self, client: AsyncClient, db: AsyncSession, sales: User, sales_token
    ):
        sales.is_active = False
        await db.commit()

        response = await client.get("/api/v1/users/me", headers=auth_header(sales_token))
        assert response.status_code == 403


class TestUpdateMe:
    """Tests for PATCH /users/me endpoint."""

    async def test_update_me_success(self, client: AsyncClient, admin_token):
        response = await client.patch(
            "/api/v1/users/me",
            headers=auth_header(admin_token),
            json={"first_name": "Updated"},
        )

        assert response.status_code == 200
        assert response.json()["first_name"] == "Updated"

    async def test_cannot_change_own_role(self, client: AsyncClient, sales_token):
        response = await client.patch(
            "/api/v1/users/me",
            headers=auth_header(sales_token),
            json={"role": "admin"},
        )

        assert response.status_code == 200
        assert response.json()["role"] == "sales"


class TestChangePassword:
    """Tests for POST /users/me/password endpoint."""

    async def test_change_password_success(self, client: AsyncClient, admin: User, admin_token):
        response = await client.post(
            "/api/v1/users/me/password",
            headers=auth_header(admin_token),
            json={"current_password": PASSWORD, "new_password": "newpassword123"},
        )
        assert response.status_code == 204

        login_response = await client.post(
            "/api/v1/auth/login",
            json={"email": admin.email, "password": "newpassword123"},
        )
        assert login_response.status_code == 200

    async def test_change_password_wrong_current(self, client: AsyncClient, admin_token):
        response = await client.post(
            "/api/v1/users/me/password",
            headers=auth_header(admin_token),
            json={"current_password": "wrongpassword", "new_password": "newpassword123"},
        )

        assert response.status_code == 400
        assert "Current password is incorrect" in response.json()["detail"]


class TestCreateUser:
    """Tests for POST /users endpoint."""

    async def test_admin_creates_supervisor(
        self, client: AsyncClient, tenant: Tenant, admin_token
    ):
        response = await client.post(
            "/api/v1/users",
            headers=auth_header(admin_token),
            json=new_user("lead@acme.io", role="supervisor"),
        )

        assert response.status_code == 201
        assert response.json()["role"] == "supervisor"
        assert response.json()["tenant_id"] == str(tenant.id)

    async def test_admin_creates_sales_under_supervisor(
        self, client: AsyncClient, supervisor: User, admin_token
    ):
        response = await client.post(
            "/api/v1/users",
            headers=auth_header(admin_token),
            json=new_user("agent@acme.io", supervisor_id=str(supervisor.id)),
        )

        assert response.status_code == 201
        assert response.json()["supervisor_id"] == str(supervisor.id)

    async def test_supervisor_reference_must_be_supervisor(
        self, client: AsyncClient, sales: User, admin_token
    ):
        response = await client.post(
            "/api/v1/users",
            headers=auth_header(admin_token),
            json=new_user("agent@acme.io", supervisor_id=str(sales.id)),
        )
        assert response.status_code == 400

    async def test_admin_cannot_create_admin(self, client: AsyncClient, admin_token):
        response = await client.post(
            "/api/v1/users",
            headers=auth_header(admin_token),
            json=new_user("admin2@acme.io", role="admin"),
        )
        assert response.status_code == 403

    async def test_supervisor_creates_team_member(
        self, client: AsyncClient, supervisor: User, supervisor_token
    ):
        response = await client.post(
            "/api/v1/users",
            headers=auth_header(supervisor_token),
            json=new_user("rookie@acme.io"),
        )

        assert response.status_code == 201
        assert response.json()["role"] == "sales"
        assert response.json()["supervisor_id"] == str(supervisor.id)

    async def test_supervisor_cannot_create_supervisor(
        self, client: AsyncClient, supervisor_token
    ):
        response = await client.post(
            "/api/v1/users",
            headers=auth_header(supervisor_token),
            json=new_user("peer@acme.io", role="supervisor"),
        )
        assert response.status_code == 403

    async def test_sales_cannot_create(self, client: AsyncClient, sales_token):
        response = await client.post(
            "/api/v1/users",
            headers=auth_header(sales_token),
            json=new_user("friend@acme.io"),
        )
        assert response.status_code == 403

    async def test_duplicate_email(self, client: AsyncClient, sales: User, admin_token):
        response = await client.post(
            "/api/v1/users",
            headers=auth_header(admin_token),
            json=new_user("SALES@acme.io"),
        )

        assert response.status_code == 400
        assert "Email already registered" in response.json()["detail"]


class TestListUsers:
    """Tests for GET /users endpoint."""

    async def test_admin_sees_tenant(
        self,
        client: AsyncClient,
        admin: User,
        supervisor: User,
        sales: User,
        other_sales: User,
        other_admin: User,
        admin_token,
    ):
        response = await client.get("/api/v1/users", headers=auth_header(admin_token))

        assert response.status_code == 200
        emails = {u["email"] for u in response.json()["items"]}
        assert emails == {admin.email, supervisor.email, sales.email, other_sales.email}

    async def test_supervisor_sees_team(
        self, client: AsyncClient, supervisor: User, sales: User, other_sales: User,
        supervisor_token,
    ):
        response = await client.get("/api/v1/users", headers=auth_header(supervisor_token))

        emails = {u["email"] for u in response.json()["items"]}
        assert emails == {supervisor.email, sales.email}

    async def test_superadmin_sees_all_accounts(
        self, client: AsyncClient, admin: User, other_admin: User, superadmin_token
    ):
        response = await client.get("/api/v1/users", headers=auth_header(superadmin_token))

        assert response.status_code == 200
        assert response.json()["total"] == 3

    async def test_sales_cannot_list(self, client: AsyncClient, sales_token):
        response = await client.get("/api/v1/users", headers=auth_header(sales_token))
        assert response.status_code == 403

    async def test_filter_by_role(
        self, client: AsyncClient, supervisor: User, sales: User, admin_token
    ):
        response = await client.get(
            "/api/v1/users",
            headers=auth_header(admin_token),
            params={"role": "sales"},
        )
        assert [u["email"] for u in response.json()["items"]] == [sales.email]


class TestManageUser:
    """Tests for GET/PATCH/DELETE /users/{id}."""

    async def test_get_other_tenant_user(
        self, client: AsyncClient, other_admin: User, admin_token
    ):
        response = await client.get(
            f"/api/v1/users/{other_admin.id}",
            headers=auth_header(admin_token),
        )
        assert response.status_code == 404

    async def test_admin_promotes_sales(self, client: AsyncClient, sales: User, admin_token):
        response = await client.patch(
            f"/api/v1/users/{sales.id}",
            headers=auth_header(admin_token),
            json={"role": "supervisor"},
        )

        assert response.status_code == 200
        assert response.json()["role"] == "supervisor"

    async def test_admin_cannot_manage_self(self, client: AsyncClient, admin: User, admin_token):
        response = await client.patch(
            f"/api/v1/users/{admin.id}",
            headers=auth_header(admin_token),
            json={"first_name": "Me"},
        )
        assert response.status_code == 403

    async def test_supervisor_cannot_update(
        self, client: AsyncClient, sales: User, supervisor_token
    ):
        response = await client.patch(
            f"/api/v1/users/{sales.id}",
            headers=auth_header(supervisor_token),
            json={"first_name": "Renamed"},
        )
        assert response.status_code == 403

    async def test_deactivate_blocks_login(
        self, client: AsyncClient, sales: User, admin_token
    ):
        response = await client.delete(
            f"/api/v1/users/{sales.id}",
            headers=auth_header(admin_token),
        )
        assert response.status_code == 204

        login_response = await client.post(
            "/api/v1/auth/login",
            json={"email": sales.email, "password": PASSWORD},
        )
        assert login_response.status_code == 403
