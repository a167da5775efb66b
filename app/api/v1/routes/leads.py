"""Lead routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import Context, RequestedTenant
from app.core.tenancy import ensure_owner_in_scope, scoped_query
from app.models.lead import LeadStatus
from app.schemas.lead import (
    LeadAssign,
    LeadCreate,
    LeadListResponse,
    LeadResponse,
    LeadUpdate,
)
from app.services import lead as lead_service
from app.services.activity import record_activity

router = APIRouter(prefix="/leads", tags=["Leads"])


# ============== Helper Functions ==============


def lead_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Lead not found",
    )


# ============== Endpoints ==============


@router.get("", response_model=LeadListResponse)
async def list_leads(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
    tenant_id: RequestedTenant,
    lead_status: LeadStatus | None = Query(None, alias="status", description="Filter by status"),
    assigned_to: UUID | None = Query(None, description="Filter by assigned agent"),
    search: str | None = Query(None, description="Search by name"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=100, description="Max number of records"),
) -> LeadListResponse:
    """
    List leads visible to the caller.

    - ADMIN: every lead of the tenant
    - SUPERVISOR: leads assigned to the team
    - SALES: leads assigned to the caller
    """
    leads, total = await scoped_query(
        context,
        "leads",
        "read",
        lambda scope: lead_service.get_leads(
            db,
            scope,
            status=lead_status,
            assigned_to=assigned_to,
            search=search,
            skip=skip,
            limit=limit,
        ),
        tenant_id=tenant_id,
    )

    return LeadListResponse(
        items=[LeadResponse.model_validate(lead) for lead in leads],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.post("", response_model=LeadResponse, status_code=status.HTTP_201_CREATED)
async def create_lead(
    lead_data: LeadCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> LeadResponse:
    """Create a lead, optionally assigned to an agent of the tenant."""

    async def create(scope):
        if lead_data.assigned_to is not None:
            await ensure_owner_in_scope(db, scope, lead_data.assigned_to)
        return await lead_service.create_lead(db, scope, lead_data, context.user_id)

    lead = await scoped_query(context, "leads", "create", create)
    response = LeadResponse.model_validate(lead)

    await record_activity(
        db, context.tenant_id, context.user_id, "lead", response.id, "created",
        f"Lead {response.name} created",
    )
    return response


@router.get("/{lead_id}", response_model=LeadResponse)
async def get_lead(
    lead_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> LeadResponse:
    """Get a specific lead by ID, if visible to the caller."""
    lead = await scoped_query(
        context,
        "leads",
        "read",
        lambda scope: lead_service.get_lead_by_id(db, scope, lead_id),
    )

    if not lead:
        raise lead_not_found()

    return LeadResponse.model_validate(lead)


@router.put("/{lead_id}", response_model=LeadResponse)
async def update_lead(
    lead_id: UUID,
    lead_data: LeadUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> LeadResponse:
    """Update a lead within the caller's scope."""

    async def update(scope):
        lead = await lead_service.get_lead_by_id(db, scope, lead_id)
        if not lead:
            raise lead_not_found()
        return await lead_service.update_lead(db, lead, lead_data)

    lead = await scoped_query(context, "leads", "update", update)
    response = LeadResponse.model_validate(lead)

    changed = ", ".join(sorted(lead_data.model_dump(exclude_unset=True))) or "nothing"
    await record_activity(
        db, context.tenant_id, context.user_id, "lead", response.id, "updated",
        f"Lead {response.name} updated: {changed}",
    )
    return response


@router.delete("/{lead_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lead(
    lead_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> None:
    """Delete a lead (ADMIN only)."""

    async def delete(scope):
        lead = await lead_service.get_lead_by_id(db, scope, lead_id)
        if not lead:
            raise lead_not_found()
        try:
            await lead_service.delete_lead(db, lead)
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            )

    await scoped_query(context, "leads", "delete", delete)


@router.post("/{lead_id}/assign", response_model=LeadResponse)
async def assign_lead(
    lead_id: UUID,
    assign_data: LeadAssign,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> LeadResponse:
    """
    Assign a lead to an agent.

    - ADMIN: any lead to any active member of the tenant
    - SUPERVISOR: unassigned or team leads, to a member of the team
    """

    async def assign(scope):
        lead = await lead_service.get_assignable_lead(db, scope, lead_id)
        if not lead:
            raise lead_not_found()
        agent = await ensure_owner_in_scope(db, scope, assign_data.assigned_to)
        return await lead_service.assign_lead(db, lead, agent.id), agent.full_name

    lead, agent_name = await scoped_query(context, "leads", "assign", assign)
    response = LeadResponse.model_validate(lead)

    await record_activity(
        db, context.tenant_id, context.user_id, "lead", response.id, "assigned",
        f"Lead {response.name} assigned to {agent_name}",
    )
    return response
