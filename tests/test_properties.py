"""Tests for property endpoints."""

from decimal import Decimal

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.property import Property, PropertyStatus, PropertyType
from app.models.tenant import Tenant
from tests.conftest import auth_header

LISTING = {
    "title": "Modern loft",
    "type": "apartment",
    "location": "Downtown Austin",
    "price": "425000.00",
    "bedrooms": 2,
    "bathrooms": 2,
}


@pytest_asyncio.fixture
async def listings(db: AsyncSession, tenant: Tenant, other_tenant: Tenant) -> list[Property]:
    created = [
        Property(
            tenant_id=tenant.id,
            title="Family house",
            type=PropertyType.HOUSE,
            location="Round Rock",
            price=Decimal("350000"),
        ),
        Property(
            tenant_id=tenant.id,
            title="Corner lot",
            type=PropertyType.LAND,
            location="Austin",
            price=Decimal("90000"),
            status=PropertyStatus.SOLD,
        ),
        Property(
            tenant_id=other_tenant.id,
            title="Beach condo",
            type=PropertyType.CONDO,
            location="Miami",
            price=Decimal("700000"),
        ),
    ]
    db.add_all(created)
    await db.commit()
    yield created


class TestListProperties:
    """Tests for GET /properties endpoint."""

    async def test_sales_sees_tenant_listings(self, client: AsyncClient, listings, sales_token):
        response = await client.get("/api/v1/properties", headers=auth_header(sales_token))

        assert response.status_code == 200
        titles = {p["title"] for p in response.json()["items"]}
        assert titles == {"Family house", "Corner lot"}

    async def test_supervisor_sees_tenant_listings(
        self, client: AsyncClient, listings, supervisor_token
    ):
        response = await client.get("/api/v1/properties", headers=auth_header(supervisor_token))

        assert response.status_code == 200
        assert response.json()["total"] == 2

    async def test_filters(self, client: AsyncClient, listings, admin_token):
        response = await client.get(
            "/api/v1/properties",
            headers=auth_header(admin_token),
            params={"status": "available", "location": "round"},
        )

        assert [p["title"] for p in response.json()["items"]] == ["Family house"]

    async def test_superadmin_cannot_read_listings(
        self, client: AsyncClient, listings, superadmin_token
    ):
        response = await client.get("/api/v1/properties", headers=auth_header(superadmin_token))
        assert response.status_code == 403


class TestCreateProperty:
    """Tests for POST /properties endpoint."""

    async def test_admin_creates(self, client: AsyncClient, tenant: Tenant, admin_token):
        response = await client.post(
            "/api/v1/properties",
            headers=auth_header(admin_token),
            json=LISTING,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["tenant_id"] == str(tenant.id)
        assert data["status"] == "available"

        feed = await client.get("/api/v1/activities", headers=auth_header(admin_token))
        assert [(a["entity_type"], a["action"]) for a in feed.json()] == [("property", "created")]

    async def test_sales_cannot_create(self, client: AsyncClient, sales_token):
        response = await client.post(
            "/api/v1/properties",
            headers=auth_header(sales_token),
            json=LISTING,
        )
        assert response.status_code == 403

    async def test_invalid_type(self, client: AsyncClient, admin_token):
        response = await client.post(
            "/api/v1/properties",
            headers=auth_header(admin_token),
            json={**LISTING, "type": "castle"},
        )
        assert response.status_code == 422


class TestManageProperty:
    """Tests for GET/PUT/DELETE /properties/{id}."""

    async def test_get_other_tenant_listing(self, client: AsyncClient, listings, admin_token):
        response = await client.get(
            f"/api/v1/properties/{listings[2].id}",
            headers=auth_header(admin_token),
        )
        assert response.status_code == 404

    async def test_admin_updates_status(self, client: AsyncClient, listings, admin_token):
        response = await client.put(
            f"/api/v1/properties/{listings[0].id}",
            headers=auth_header(admin_token),
            json={"status": "pending"},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "pending"

    async def test_supervisor_cannot_update(self, client: AsyncClient, listings, supervisor_token):
        response = await client.put(
            f"/api/v1/properties/{listings[0].id}",
            headers=auth_header(supervisor_token),
            json={"price": "1.00"},
        )
        assert response.status_code == 403

    async def test_admin_deletes(self, client: AsyncClient, listings, admin_token):
        response = await client.delete(
            f"/api/v1/properties/{listings[1].id}",
            headers=auth_header(admin_token),
        )
        assert response.status_code == 204
