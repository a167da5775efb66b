"""Dashboard routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import Context
from app.schemas.dashboard import DashboardStats, PlatformStats
from app.services import dashboard as dashboard_service

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=PlatformStats | DashboardStats)
async def get_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> PlatformStats | DashboardStats:
    """
    Summary statistics for the caller's role.

    - SUPERADMIN: tenant counts, platform revenue, active users
    - ADMIN: the whole tenant
    - SUPERVISOR: leads and deals of the team
    - SALES: assigned leads and own deals
    """
    return await dashboard_service.compute_stats(db, context)
