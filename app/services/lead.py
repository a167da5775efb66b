"""Lead service - business logic for lead operations."""

from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.tenancy import DataScope, TenantScope
from app.models.deal import Deal
from app.models.lead import Lead, LeadStatus
from app.schemas.lead import LeadCreate, LeadUpdate


async def get_lead_by_id(
    db: AsyncSession,
    scope: DataScope,
    lead_id: UUID,
) -> Lead | None:
    """Get lead by ID if it is visible in scope."""
    query = scope.apply(select(Lead), Lead, Lead.assigned_to).where(Lead.id == lead_id)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_assignable_lead(
    db: AsyncSession,
    scope: TenantScope,
    lead_id: UUID,
) -> Lead | None:
    """Get a lead the caller may (re)assign: unassigned, or owned in scope."""
    query = select(Lead).where(Lead.id == lead_id, Lead.tenant_id == scope.tenant_id)
    owner = scope.owner_filter(Lead.assigned_to)
    if owner is not None:
        query = query.where(or_(Lead.assigned_to.is_(None), owner))
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_leads(
    db: AsyncSession,
    scope: DataScope,
    *,
    status: LeadStatus | None = None,
    assigned_to: UUID | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 100,
) -> tuple[list[Lead], int]:
    """Get leads visible in scope with filters."""
    query = scope.apply(select(Lead), Lead, Lead.assigned_to)

    # Apply filters
    if status:
        query = query.where(Lead.status == status)
    if assigned_to:
        query = query.where(Lead.assigned_to == assigned_to)
    if search:
        query = query.where(Lead.name.ilike(f"%{search}%"))

    # Count total
    count_query = select(func.count()).select_from(query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    # Apply pagination and ordering
    query = query.order_by(Lead.created_at.desc()).offset(skip).limit(limit)

    result = await db.execute(query)
    leads = list(result.scalars().all())

    return leads, total


async def create_lead(
    db: AsyncSession,
    scope: TenantScope,
    lead_data: LeadCreate,
    created_by: UUID,
) -> Lead:
    """Create a new lead in the scope's tenant."""
    lead = Lead(
        tenant_id=scope.tenant_id,
        created_by=created_by,
        **lead_data.model_dump(),
    )
    db.add(lead)
    await db.commit()
    await db.refresh(lead)

    return lead


async def update_lead(
    db: AsyncSession,
    lead: Lead,
    lead_data: LeadUpdate,
) -> Lead:
    """Update an existing lead."""
    update_data = lead_data.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        setattr(lead, field, value)

    await db.commit()
    await db.refresh(lead)

    return lead


async def assign_lead(db: AsyncSession, lead: Lead, assigned_to: UUID) -> Lead:
    """Assign a lead to an agent."""
    lead.assigned_to = assigned_to
    await db.commit()
    await db.refresh(lead)
    return lead


async def delete_lead(db: AsyncSession, lead: Lead) -> None:
    """
    Delete a lead.

    Raises:
        ValueError: If a deal references the lead.
    """
    result = await db.execute(
        select(func.count()).select_from(Deal).where(Deal.lead_id == lead.id)
    )
    if result.scalar():
        raise ValueError("Cannot delete a lead with recorded deals")

    await db.delete(lead)
    await db.commit()
