"""Dashboard service - role-scoped summary statistics."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthorizationError
from app.core.permissions import Role, Scope, authorize
from app.core.tenancy import AccessContext, DataScope, scoped_query
from app.models.deal import Deal, DealStatus
from app.models.lead import Lead
from app.models.property import Property, PropertyStatus
from app.models.tenant import Tenant
from app.models.user import User
from app.schemas.dashboard import DashboardStats, PlatformStats, StatsRecord
from app.services.commission import to_money


# Grant each role needs to see its dashboard
DASHBOARD_GRANTS = {
    Role.SUPERADMIN: ("reports", Scope.ALL),
    Role.ADMIN: ("reports", Scope.TENANT),
    Role.SUPERVISOR: ("reports", Scope.TEAM),
    Role.SALES: ("dashboard", Scope.OWN),
}


async def _platform_stats(db: AsyncSession, view: DataScope) -> PlatformStats:
    """Aggregate tenants and accounts across the whole platform."""
    tenant_query = view.apply(
        select(
            func.count(Tenant.id).label("total"),
            func.count(Tenant.id).filter(Tenant.is_active.is_(True)).label("active"),
            func.coalesce(
                func.sum(Tenant.monthly_fee).filter(Tenant.is_active.is_(True)), 0
            ).label("revenue"),
        ),
        Tenant,
    )
    tenant_row = (await db.execute(tenant_query)).one()

    users_query = view.apply(
        select(func.count(User.id)).where(
            User.is_active.is_(True),
            User.tenant_id.is_not(None),
        ),
        User,
    )
    active_users = (await db.execute(users_query)).scalar() or 0

    return PlatformStats(
        total_tenants=tenant_row.total,
        active_tenants=tenant_row.active,
        platform_revenue=to_money(tenant_row.revenue or 0),
        active_users=active_users,
    )


async def _count_leads(db: AsyncSession, scope: DataScope) -> int:
    query = scope.apply(select(func.count(Lead.id)), Lead, Lead.assigned_to)
    return (await db.execute(query)).scalar() or 0


async def _count_active_properties(db: AsyncSession, scope: DataScope) -> int:
    query = scope.apply(
        select(func.count(Property.id)).where(Property.status == PropertyStatus.AVAILABLE),
        Property,
    )
    return (await db.execute(query)).scalar() or 0


async def _closed_deal_totals(db: AsyncSession, scope: DataScope):
    query = scope.apply(
        select(
            func.count(Deal.id).label("count"),
            func.coalesce(func.sum(Deal.agent_commission), 0).label("agent_total"),
            func.coalesce(func.sum(Deal.company_commission), 0).label("company_total"),
        ).where(Deal.status == DealStatus.CLOSED),
        Deal,
        Deal.agent_id,
    )
    return (await db.execute(query)).one()


async def compute_stats(db: AsyncSession, context: AccessContext) -> StatsRecord:
    """
    Compute the dashboard for the caller's role.

    - superadmin: tenant counts, platform revenue and active users, never
      per-tenant business rows.
    - admin: leads, available listings and closed deals of the tenant.
    - supervisor: the same, limited to leads/deals owned by the team.
    - sales: the same, limited to assigned leads and own deals.

    The dashboard grant is checked before any query runs; each metric is
    then read through the caller's own grant on leads/properties/deals.

    Raises:
        AuthorizationError: If the role holds no dashboard grant.
    """
    resource, scope = DASHBOARD_GRANTS.get(context.role, (None, None))
    if resource is None or not authorize(context.role, resource, "read", scope):
        raise AuthorizationError("Not allowed to view dashboard statistics")

    if scope == Scope.ALL:
        return await scoped_query(
            context, "tenants", "read", lambda view: _platform_stats(db, view)
        )

    total_leads = await scoped_query(
        context, "leads", "read", lambda s: _count_leads(db, s)
    )
    active_properties = await scoped_query(
        context, "properties", "read", lambda s: _count_active_properties(db, s)
    )
    deals = await scoped_query(
        context, "deals", "read", lambda s: _closed_deal_totals(db, s)
    )

    return DashboardStats(
        role=context.role,
        scope=scope,
        total_leads=total_leads,
        active_properties=active_properties,
        closed_deals=deals.count,
        total_commission=to_money(deals.agent_total or 0),
        company_commission=to_money(deals.company_total or 0),
    )
