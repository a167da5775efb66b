"""Activity service - append-only audit trail."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging_config import get_logger
from app.core.tenancy import DataScope
from app.models.activity import Activity

logger = get_logger(__name__)


async def record_activity(
    db: AsyncSession,
    tenant_id: UUID,
    user_id: UUID | None,
    entity_type: str,
    entity_id: UUID,
    action: str,
    description: str | None = None,
) -> Activity | None:
    """
    Append an activity entry for a mutation that already succeeded.

    Recording is best-effort: a storage failure is logged and swallowed so
    the mutation it describes is never undone. Returns None in that case.
    """
    activity = Activity(
        tenant_id=tenant_id,
        user_id=user_id,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        description=description,
    )
    try:
        db.add(activity)
        await db.commit()
        await db.refresh(activity)
    except SQLAlchemyError:
        logger.exception(
            "Failed to record activity %s %s:%s for tenant %s",
            action,
            entity_type,
            entity_id,
            tenant_id,
        )
        await db.rollback()
        return None

    return activity


async def get_activities(
    db: AsyncSession,
    scope: DataScope,
    *,
    limit: int = 20,
) -> list[Activity]:
    """Get the most recent activities visible in scope."""
    query = scope.apply(select(Activity), Activity, Activity.user_id)
    query = query.order_by(Activity.created_at.desc()).limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())
