"""Property schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.property import PropertyStatus, PropertyType


class PropertyCreate(BaseModel):
    """Schema for listing a property."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    type: PropertyType
    location: str = Field(..., min_length=1)
    price: Decimal = Field(..., gt=0, decimal_places=2)
    bedrooms: int | None = Field(None, ge=0)
    bathrooms: int | None = Field(None, ge=0)
    square_feet: int | None = Field(None, ge=0)
    image_url: str | None = Field(None, max_length=500)
    status: PropertyStatus = PropertyStatus.AVAILABLE


class PropertyUpdate(BaseModel):
    """Schema for updating a property."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    type: PropertyType | None = None
    location: str | None = Field(None, min_length=1)
    price: Decimal | None = Field(None, gt=0, decimal_places=2)
    bedrooms: int | None = Field(None, ge=0)
    bathrooms: int | None = Field(None, ge=0)
    square_feet: int | None = Field(None, ge=0)
    image_url: str | None = Field(None, max_length=500)
    status: PropertyStatus | None = None


class PropertyResponse(BaseModel):
    """Property response schema."""

    id: UUID
    tenant_id: UUID
    title: str
    description: str | None
    type: PropertyType
    location: str
    price: Decimal
    bedrooms: int | None
    bathrooms: int | None
    square_feet: int | None
    image_url: str | None
    status: PropertyStatus
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PropertyListResponse(BaseModel):
    """Paginated list of properties."""

    items: list[PropertyResponse]
    total: int
    skip: int
    limit: int
