"""Activity feed routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.deps import Context, RequestedTenant
from app.core.tenancy import scoped_query
from app.schemas.activity import ActivityResponse
from app.services import activity as activity_service

router = APIRouter(prefix="/activities", tags=["Activities"])


@router.get("", response_model=list[ActivityResponse])
async def list_activities(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
    tenant_id: RequestedTenant,
    limit: int = Query(
        settings.ACTIVITY_FEED_LIMIT, ge=1, le=100, description="Max number of entries"
    ),
) -> list[ActivityResponse]:
    """
    Most recent activity, newest first.

    - ADMIN: the whole tenant
    - SUPERVISOR: actions taken by the team
    - SALES: the caller's own actions
    """
    activities = await scoped_query(
        context,
        "activities",
        "read",
        lambda scope: activity_service.get_activities(db, scope, limit=limit),
        tenant_id=tenant_id,
    )
    return [ActivityResponse.model_validate(a) for a in activities]
