"""Tenant schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.validators import Email, HexColor, Subdomain


class TenantCreate(BaseModel):
    """Schema for onboarding a new tenant together with its first admin."""

    name: str = Field(..., min_length=1, max_length=255)
    subdomain: Subdomain
    plan: str = Field("basic", min_length=1, max_length=50)
    monthly_fee: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    company_share_rate: Decimal | None = Field(None, ge=0, le=1)

    admin_email: Email
    admin_password: str = Field(..., min_length=6)
    admin_first_name: str = Field(..., min_length=1, max_length=100)
    admin_last_name: str = Field(..., min_length=1, max_length=100)


class TenantUpdate(BaseModel):
    """Schema for updating a tenant (platform level)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    custom_domain: str | None = Field(None, max_length=255)
    plan: str | None = Field(None, min_length=1, max_length=50)
    monthly_fee: Decimal | None = Field(None, ge=0, decimal_places=2)
    company_share_rate: Decimal | None = Field(None, ge=0, le=1)
    is_active: bool | None = None


class TenantBrandingUpdate(BaseModel):
    """Schema for a tenant admin updating company branding."""

    name: str | None = Field(None, min_length=1, max_length=255)
    logo_url: str | None = Field(None, max_length=500)
    primary_color: HexColor | None = None
    secondary_color: HexColor | None = None


class TenantResponse(BaseModel):
    """Tenant response schema."""

    id: UUID
    name: str
    subdomain: str | None
    custom_domain: str | None
    logo_url: str | None
    primary_color: str
    secondary_color: str
    plan: str
    monthly_fee: Decimal
    company_share_rate: Decimal | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TenantListResponse(BaseModel):
    """Paginated list of tenants."""

    items: list[TenantResponse]
    total: int
    skip: int
    limit: int
