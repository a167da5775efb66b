"""Lead schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.lead import LeadStatus
from app.models.property import PropertyType


class LeadCreate(BaseModel):
    """Schema for creating a lead."""

    name: str = Field(..., min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    budget: Decimal | None = Field(None, ge=0, decimal_places=2)
    location: str | None = None
    property_type: PropertyType | None = None
    status: LeadStatus = LeadStatus.NEW
    assigned_to: UUID | None = None
    notes: str | None = None
    source: str | None = Field(None, max_length=100)


class LeadUpdate(BaseModel):
    """Schema for updating a lead. Assignment goes through /assign."""

    name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    budget: Decimal | None = Field(None, ge=0, decimal_places=2)
    location: str | None = None
    property_type: PropertyType | None = None
    status: LeadStatus | None = None
    notes: str | None = None
    source: str | None = Field(None, max_length=100)


class LeadAssign(BaseModel):
    """Schema for (re)assigning a lead to an agent."""

    assigned_to: UUID


class LeadResponse(BaseModel):
    """Lead response schema."""

    id: UUID
    tenant_id: UUID
    name: str
    phone: str | None
    email: str | None
    budget: Decimal | None
    location: str | None
    property_type: PropertyType | None
    status: LeadStatus
    assigned_to: UUID | None
    notes: str | None
    source: str | None
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LeadListResponse(BaseModel):
    """Paginated list of leads."""

    items: list[LeadResponse]
    total: int
    skip: int
    limit: int
