"""Exchange rate routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import Context, RequestedTenant
from app.core.tenancy import scoped_query
from app.schemas.exchange_rate import ExchangeRateResponse, ExchangeRateUpdate
from app.services import exchange_rate as exchange_rate_service

router = APIRouter(prefix="/exchange-rates", tags=["Exchange Rates"])


@router.get("", response_model=ExchangeRateResponse)
async def get_exchange_rate(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
    tenant_id: RequestedTenant,
) -> ExchangeRateResponse:
    """Get the tenant's USD buy/sell rates, or the platform defaults."""

    async def fetch(scope):
        rate = await exchange_rate_service.get_exchange_rate(db, scope)
        if rate is None:
            return exchange_rate_service.default_exchange_rate(scope.tenant_id)
        return ExchangeRateResponse.model_validate(rate)

    return await scoped_query(context, "exchange_rates", "read", fetch, tenant_id=tenant_id)


@router.put("", response_model=ExchangeRateResponse)
async def set_exchange_rate(
    rate_data: ExchangeRateUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> ExchangeRateResponse:
    """Set the tenant's USD buy/sell rates (ADMIN only)."""
    rate = await scoped_query(
        context,
        "exchange_rates",
        "manage",
        lambda scope: exchange_rate_service.upsert_exchange_rate(
            db, scope, rate_data, context.user_id
        ),
    )
    return ExchangeRateResponse.model_validate(rate)
