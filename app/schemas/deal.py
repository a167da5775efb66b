"""Deal schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.deal import DealStatus


class DealCreate(BaseModel):
    """
    Schema for recording a deal.

    Commissions are derived from sale_price and commission_percentage;
    agent_id defaults to the caller.
    """

    property_id: UUID
    lead_id: UUID
    sale_price: Decimal = Field(..., gt=0, decimal_places=2)
    commission_percentage: Decimal = Field(Decimal("3"), ge=0, le=100, decimal_places=2)
    agent_id: UUID | None = None
    deal_date: datetime | None = None


class DealUpdate(BaseModel):
    """Schema for updating a deal. Closing goes through /approve."""

    sale_price: Decimal | None = Field(None, gt=0, decimal_places=2)
    commission_percentage: Decimal | None = Field(None, ge=0, le=100, decimal_places=2)
    deal_date: datetime | None = None
    cancel: bool = False


class DealResponse(BaseModel):
    """Deal response schema."""

    id: UUID
    tenant_id: UUID
    property_id: UUID
    lead_id: UUID
    sale_price: Decimal
    commission_percentage: Decimal
    agent_commission: Decimal
    company_commission: Decimal
    status: DealStatus
    deal_date: datetime | None
    agent_id: UUID | None
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DealListResponse(BaseModel):
    """Paginated list of deals."""

    items: list[DealResponse]
    total: int
    skip: int
    limit: int
