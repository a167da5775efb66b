"""Exchange rate schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class ExchangeRateUpdate(BaseModel):
    """Schema for setting a tenant's USD rates."""

    buy_rate: Decimal = Field(..., gt=0, decimal_places=2)
    sell_rate: Decimal = Field(..., gt=0, decimal_places=2)


class ExchangeRateResponse(BaseModel):
    """Exchange rate response; is_default marks the platform fallback."""

    tenant_id: UUID
    buy_rate: Decimal
    sell_rate: Decimal
    updated_by: UUID | None = None
    updated_at: datetime | None = None
    is_default: bool = False

    model_config = {"from_attributes": True}
