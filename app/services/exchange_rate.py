"""Exchange rate service."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.tenancy import DataScope, TenantScope
from app.models.exchange_rate import ExchangeRate
from app.schemas.exchange_rate import ExchangeRateResponse, ExchangeRateUpdate


async def get_exchange_rate(db: AsyncSession, scope: DataScope) -> ExchangeRate | None:
    """Get the tenant's exchange rate row, if it has set one."""
    query = scope.apply(select(ExchangeRate), ExchangeRate)
    result = await db.execute(query)
    return result.scalar_one_or_none()


def default_exchange_rate(tenant_id: UUID) -> ExchangeRateResponse:
    """Platform default rates for tenants that have not set their own."""
    return ExchangeRateResponse(
        tenant_id=tenant_id,
        buy_rate=settings.DEFAULT_BUY_RATE,
        sell_rate=settings.DEFAULT_SELL_RATE,
        is_default=True,
    )


async def upsert_exchange_rate(
    db: AsyncSession,
    scope: TenantScope,
    rate_data: ExchangeRateUpdate,
    updated_by: UUID,
) -> ExchangeRate:
    """Create or replace the tenant's exchange rate."""
    rate = await get_exchange_rate(db, scope)

    if rate is None:
        rate = ExchangeRate(tenant_id=scope.tenant_id)
        db.add(rate)

    rate.buy_rate = rate_data.buy_rate
    rate.sell_rate = rate_data.sell_rate
    rate.updated_by = updated_by

    await db.commit()
    await db.refresh(rate)

    return rate
