"""Dashboard schemas."""

from decimal import Decimal

from pydantic import BaseModel, Field

from app.core.permissions import Role, Scope


class PlatformStats(BaseModel):
    """Platform-wide aggregates shown to superadmins."""

    role: Role = Role.SUPERADMIN
    scope: Scope = Scope.ALL
    total_tenants: int
    active_tenants: int
    platform_revenue: Decimal = Field(description="Sum of active tenants' monthly fees")
    active_users: int


class DashboardStats(BaseModel):
    """Lead, listing and deal aggregates within the caller's scope."""

    role: Role
    scope: Scope
    total_leads: int
    active_properties: int = Field(description="Listings with status available")
    closed_deals: int
    total_commission: Decimal = Field(description="Agent commission over closed deals")
    company_commission: Decimal = Field(description="Company share over closed deals")


StatsRecord = PlatformStats | DashboardStats
