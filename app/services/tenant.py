"""Tenant service - platform-level tenant management."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.permissions import Role
from app.core.security import get_password_hash
from app.core.tenancy import DataScope
from app.models.tenant import Tenant
from app.models.user import User
from app.schemas.tenant import TenantBrandingUpdate, TenantCreate, TenantUpdate


async def get_tenant_by_id(
    db: AsyncSession,
    scope: DataScope,
    tenant_id: UUID,
) -> Tenant | None:
    """Get tenant by ID, as visible in scope."""
    query = scope.apply(select(Tenant), Tenant).where(Tenant.id == tenant_id)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_tenant_by_subdomain(db: AsyncSession, subdomain: str) -> Tenant | None:
    """Get tenant by subdomain."""
    result = await db.execute(select(Tenant).where(Tenant.subdomain == subdomain))
    return result.scalar_one_or_none()


async def get_tenants(
    db: AsyncSession,
    scope: DataScope,
    *,
    is_active: bool | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[Tenant], int]:
    """Get list of tenants with optional filters."""
    query = scope.apply(select(Tenant), Tenant)

    # Apply filters
    if is_active is not None:
        query = query.where(Tenant.is_active == is_active)

    if search:
        query = query.where(Tenant.name.ilike(f"%{search}%"))

    # Get total count
    count_query = select(func.count()).select_from(query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    # Get paginated results
    query = query.order_by(Tenant.created_at.desc()).offset(skip).limit(limit)
    result = await db.execute(query)
    tenants = list(result.scalars().all())

    return tenants, total


async def create_tenant(db: AsyncSession, tenant_data: TenantCreate) -> tuple[Tenant, User]:
    """Create a tenant and its first admin in one transaction."""
    tenant = Tenant(
        name=tenant_data.name,
        subdomain=tenant_data.subdomain,
        plan=tenant_data.plan,
        monthly_fee=tenant_data.monthly_fee,
        company_share_rate=tenant_data.company_share_rate,
    )
    db.add(tenant)
    await db.flush()

    admin = User(
        email=tenant_data.admin_email,
        password_hash=get_password_hash(tenant_data.admin_password),
        first_name=tenant_data.admin_first_name,
        last_name=tenant_data.admin_last_name,
        role=Role.ADMIN,
        tenant_id=tenant.id,
    )
    db.add(admin)
    await db.commit()
    await db.refresh(tenant)
    await db.refresh(admin)

    return tenant, admin


async def update_tenant(
    db: AsyncSession,
    tenant: Tenant,
    tenant_data: TenantUpdate | TenantBrandingUpdate,
) -> Tenant:
    """Update a tenant."""
    update_data = tenant_data.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        setattr(tenant, field, value)

    await db.commit()
    await db.refresh(tenant)

    return tenant


async def deactivate_tenant(db: AsyncSession, tenant: Tenant) -> Tenant:
    """Soft delete a tenant; its users lose access until it is reactivated."""
    tenant.is_active = False
    await db.commit()
    await db.refresh(tenant)
    return tenant
