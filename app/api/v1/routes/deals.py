"""Deal routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import Context, RequestedTenant
from app.core.tenancy import ensure_owner_in_scope, scoped_query
from app.models.deal import DealStatus
from app.schemas.deal import (
    DealCreate,
    DealListResponse,
    DealResponse,
    DealUpdate,
)
from app.services import deal as deal_service
from app.services import lead as lead_service
from app.services.activity import record_activity

router = APIRouter(prefix="/deals", tags=["Deals"])


# ============== Helper Functions ==============


def deal_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Deal not found",
    )


# ============== Endpoints ==============


@router.get("", response_model=DealListResponse)
async def list_deals(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
    tenant_id: RequestedTenant,
    deal_status: DealStatus | None = Query(None, alias="status", description="Filter by status"),
    agent_id: UUID | None = Query(None, description="Filter by agent"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=100, description="Max number of records"),
) -> DealListResponse:
    """
    List deals visible to the caller.

    - ADMIN: every deal of the tenant
    - SUPERVISOR: deals closed by the team
    - SALES: the caller's own deals
    """
    deals, total = await scoped_query(
        context,
        "deals",
        "read",
        lambda scope: deal_service.get_deals(
            db, scope, status=deal_status, agent_id=agent_id, skip=skip, limit=limit
        ),
        tenant_id=tenant_id,
    )

    return DealListResponse(
        items=[DealResponse.model_validate(d) for d in deals],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.post("", response_model=DealResponse, status_code=status.HTTP_201_CREATED)
async def create_deal(
    deal_data: DealCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> DealResponse:
    """
    Record a pending deal; commissions are computed server-side.

    The agent defaults to the caller and must be within the caller's scope.
    The lead must be one the caller can read.
    """

    async def create(scope):
        agent_id = deal_data.agent_id or context.user_id
        await ensure_owner_in_scope(db, scope, agent_id)
        lead = await scoped_query(
            context,
            "leads",
            "read",
            lambda lead_scope: lead_service.get_lead_by_id(db, lead_scope, deal_data.lead_id),
        )
        if not lead:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Lead not found",
            )
        try:
            return await deal_service.create_deal(
                db, scope, deal_data, agent_id=agent_id, created_by=context.user_id
            )
        except LookupError as e:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=str(e),
            )

    deal = await scoped_query(context, "deals", "create", create)
    response = DealResponse.model_validate(deal)

    await record_activity(
        db, context.tenant_id, context.user_id, "deal", response.id, "created",
        f"Deal recorded at {response.sale_price}",
    )
    return response


@router.get("/{deal_id}", response_model=DealResponse)
async def get_deal(
    deal_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> DealResponse:
    """Get a specific deal by ID, if visible to the caller."""
    deal = await scoped_query(
        context,
        "deals",
        "read",
        lambda scope: deal_service.get_deal_by_id(db, scope, deal_id),
    )

    if not deal:
        raise deal_not_found()

    return DealResponse.model_validate(deal)


@router.put("/{deal_id}", response_model=DealResponse)
async def update_deal(
    deal_id: UUID,
    deal_data: DealUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> DealResponse:
    """Update or cancel a pending deal."""

    async def update(scope):
        deal = await deal_service.get_deal_by_id(db, scope, deal_id)
        if not deal:
            raise deal_not_found()
        try:
            return await deal_service.update_deal(db, deal, deal_data)
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            )

    deal = await scoped_query(context, "deals", "update", update)
    response = DealResponse.model_validate(deal)

    action = "cancelled" if deal_data.cancel else "updated"
    await record_activity(
        db, context.tenant_id, context.user_id, "deal", response.id, action,
        f"Deal {action}",
    )
    return response


@router.post("/{deal_id}/approve", response_model=DealResponse)
async def approve_deal(
    deal_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> DealResponse:
    """Close a pending deal (ADMIN, or SUPERVISOR for team deals)."""

    async def approve(scope):
        deal = await deal_service.get_deal_by_id(db, scope, deal_id)
        if not deal:
            raise deal_not_found()
        try:
            return await deal_service.approve_deal(db, deal)
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            )

    deal = await scoped_query(context, "deals", "approve", approve)
    response = DealResponse.model_validate(deal)

    await record_activity(
        db, context.tenant_id, context.user_id, "deal", response.id, "approved",
        f"Deal closed with commission {response.agent_commission}",
    )
    return response
