"""Tests for exchange rate endpoints."""

from decimal import Decimal

from httpx import AsyncClient

from app.models.user import User
from tests.conftest import auth_header


class TestExchangeRates:
    """Tests for GET/PUT /exchange-rates."""

    async def test_defaults_when_unset(self, client: AsyncClient, sales_token):
        response = await client.get("/api/v1/exchange-rates", headers=auth_header(sales_token))

        assert response.status_code == 200
        data = response.json()
        assert data["is_default"] is True
        assert Decimal(data["buy_rate"]) == Decimal("158.00")
        assert Decimal(data["sell_rate"]) == Decimal("179.00")

    async def test_admin_sets_rates(
        self, client: AsyncClient, admin: User, admin_token, sales_token
    ):
        response = await client.put(
            "/api/v1/exchange-rates",
            headers=auth_header(admin_token),
            json={"buy_rate": "160.50", "sell_rate": "181.25"},
        )

        assert response.status_code == 200
        assert response.json()["updated_by"] == str(admin.id)

        response = await client.get("/api/v1/exchange-rates", headers=auth_header(sales_token))
        data = response.json()
        assert data["is_default"] is False
        assert Decimal(data["buy_rate"]) == Decimal("160.50")

    async def test_rates_are_per_tenant(
        self, client: AsyncClient, admin_token, other_admin_token
    ):
        await client.put(
            "/api/v1/exchange-rates",
            headers=auth_header(admin_token),
            json={"buy_rate": "160.50", "sell_rate": "181.25"},
        )

        response = await client.get(
            "/api/v1/exchange-rates", headers=auth_header(other_admin_token)
        )
        assert response.json()["is_default"] is True

    async def test_update_existing(self, client: AsyncClient, admin_token):
        for buy in ("160.00", "162.00"):
            response = await client.put(
                "/api/v1/exchange-rates",
                headers=auth_header(admin_token),
                json={"buy_rate": buy, "sell_rate": "180.00"},
            )
            assert response.status_code == 200

        assert Decimal(response.json()["buy_rate"]) == Decimal("162.00")

    async def test_supervisor_cannot_set(self, client: AsyncClient, supervisor_token):
        response = await client.put(
            "/api/v1/exchange-rates",
            headers=auth_header(supervisor_token),
            json={"buy_rate": "1.00", "sell_rate": "1.00"},
        )
        assert response.status_code == 403

    async def test_superadmin_has_no_tenant_rate(self, client: AsyncClient, superadmin_token):
        response = await client.get(
            "/api/v1/exchange-rates", headers=auth_header(superadmin_token)
        )
        assert response.status_code == 403
