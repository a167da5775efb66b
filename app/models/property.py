"""Property listing model."""

from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel


class PropertyType(str, Enum):
    """Kind of real estate."""

    HOUSE = "house"
    CONDO = "condo"
    APARTMENT = "apartment"
    COMMERCIAL = "commercial"
    LAND = "land"


class PropertyStatus(str, Enum):
    """Listing status."""

    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"
    INACTIVE = "inactive"


class Property(BaseModel):
    """Property listed for sale by a tenant."""

    __tablename__ = "properties"

    tenant_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("tenants.id"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    type: Mapped[PropertyType] = mapped_column(String(20), nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    bedrooms: Mapped[int | None] = mapped_column(Integer)
    bathrooms: Mapped[int | None] = mapped_column(Integer)
    square_feet: Mapped[int | None] = mapped_column(Integer)
    image_url: Mapped[str | None] = mapped_column(String(500))
    status: Mapped[PropertyStatus] = mapped_column(
        String(20),
        default=PropertyStatus.AVAILABLE,
        server_default="available",
    )
    created_by: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("users.id"))

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title}, status={self.status})>"
