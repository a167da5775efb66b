"""Lead model."""

from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel
from app.models.property import PropertyType


class LeadStatus(str, Enum):
    """Where a lead is in the sales funnel."""

    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    LOST = "lost"
    CLOSED = "closed"


class Lead(BaseModel):
    """Prospective buyer tracked by a tenant."""

    __tablename__ = "leads"

    tenant_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("tenants.id"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(255))
    budget: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    location: Mapped[str | None] = mapped_column(Text)
    property_type: Mapped[PropertyType | None] = mapped_column(String(20))
    status: Mapped[LeadStatus] = mapped_column(
        String(20),
        default=LeadStatus.NEW,
        server_default="new",
    )
    assigned_to: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=True,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(Text)
    source: Mapped[str | None] = mapped_column(String(100))  # Website, Referral, etc.
    created_by: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("users.id"))

    def __repr__(self) -> str:
        return f"<Lead(id={self.id}, name={self.name}, status={self.status})>"
