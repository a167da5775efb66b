"""Deal service - business logic for deals and commissions."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.tenancy import DataScope, TenantScope
from app.models.deal import Deal, DealStatus
from app.models.lead import Lead
from app.models.property import Property
from app.models.tenant import Tenant
from app.schemas.deal import DealCreate, DealUpdate
from app.services.commission import company_share_rate_for, split_commission


async def get_deal_by_id(
    db: AsyncSession,
    scope: DataScope,
    deal_id: UUID,
) -> Deal | None:
    """Get deal by ID if it is visible in scope."""
    query = scope.apply(select(Deal), Deal, Deal.agent_id).where(Deal.id == deal_id)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_deals(
    db: AsyncSession,
    scope: DataScope,
    *,
    status: DealStatus | None = None,
    agent_id: UUID | None = None,
    skip: int = 0,
    limit: int = 100,
) -> tuple[list[Deal], int]:
    """Get deals visible in scope with filters."""
    query = scope.apply(select(Deal), Deal, Deal.agent_id)

    # Apply filters
    if status:
        query = query.where(Deal.status == status)
    if agent_id:
        query = query.where(Deal.agent_id == agent_id)

    # Count total
    count_query = select(func.count()).select_from(query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    query = query.order_by(Deal.created_at.desc()).offset(skip).limit(limit)
    result = await db.execute(query)
    deals = list(result.scalars().all())

    return deals, total


async def get_company_share_rate(db: AsyncSession, tenant_id: UUID) -> Decimal:
    """Company share rate configured for a tenant."""
    result = await db.execute(select(Tenant).where(Tenant.id == tenant_id))
    return company_share_rate_for(result.scalar_one_or_none())


async def _exists_in_tenant(db: AsyncSession, model, entity_id: UUID, tenant_id: UUID) -> bool:
    result = await db.execute(
        select(func.count()).select_from(model).where(
            model.id == entity_id,
            model.tenant_id == tenant_id,
        )
    )
    return (result.scalar() or 0) > 0


async def create_deal(
    db: AsyncSession,
    scope: TenantScope,
    deal_data: DealCreate,
    *,
    agent_id: UUID,
    created_by: UUID,
) -> Deal:
    """
    Record a new pending deal.

    The property and lead must belong to the scope's tenant; commissions are
    computed from the tenant's company share rate.

    Raises:
        LookupError: If the property or lead is not in the tenant.
    """
    if not await _exists_in_tenant(db, Property, deal_data.property_id, scope.tenant_id):
        raise LookupError("Property not found")
    if not await _exists_in_tenant(db, Lead, deal_data.lead_id, scope.tenant_id):
        raise LookupError("Lead not found")

    share_rate = await get_company_share_rate(db, scope.tenant_id)
    split = split_commission(deal_data.sale_price, deal_data.commission_percentage, share_rate)

    deal = Deal(
        tenant_id=scope.tenant_id,
        property_id=deal_data.property_id,
        lead_id=deal_data.lead_id,
        sale_price=deal_data.sale_price,
        commission_percentage=deal_data.commission_percentage,
        agent_commission=split.agent_commission,
        company_commission=split.company_commission,
        deal_date=deal_data.deal_date,
        agent_id=agent_id,
        created_by=created_by,
    )
    db.add(deal)
    await db.commit()
    await db.refresh(deal)

    return deal


async def update_deal(
    db: AsyncSession,
    deal: Deal,
    deal_data: DealUpdate,
) -> Deal:
    """
    Update a pending deal, recomputing commissions when amounts change.

    Raises:
        ValueError: If the deal is no longer pending.
    """
    if deal.status != DealStatus.PENDING:
        raise ValueError(f"Cannot modify a {DealStatus(deal.status).value} deal")

    update_data = deal_data.model_dump(exclude_unset=True, exclude={"cancel"})
    for field, value in update_data.items():
        if value is not None:
            setattr(deal, field, value)

    if "sale_price" in update_data or "commission_percentage" in update_data:
        share_rate = await get_company_share_rate(db, deal.tenant_id)
        split = split_commission(deal.sale_price, deal.commission_percentage, share_rate)
        deal.agent_commission = split.agent_commission
        deal.company_commission = split.company_commission

    if deal_data.cancel:
        deal.status = DealStatus.CANCELLED

    await db.commit()
    await db.refresh(deal)

    return deal


async def approve_deal(db: AsyncSession, deal: Deal) -> Deal:
    """
    Close a pending deal.

    Raises:
        ValueError: If the deal is not pending.
    """
    if deal.status != DealStatus.PENDING:
        raise ValueError(f"Cannot approve a {DealStatus(deal.status).value} deal")

    deal.status = DealStatus.CLOSED
    if deal.deal_date is None:
        deal.deal_date = datetime.now(timezone.utc)

    await db.commit()
    await db.refresh(deal)

    return deal
