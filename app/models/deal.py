"""Deal model."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import BaseModel


class DealStatus(str, Enum):
    """Deal lifecycle status."""

    PENDING = "pending"
    CLOSED = "closed"
    CANCELLED = "cancelled"


class Deal(BaseModel):
    """A sale of a property to a lead, with its commission split."""

    __tablename__ = "deals"

    tenant_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("tenants.id"),
        nullable=False,
        index=True,
    )
    property_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("properties.id"),
        nullable=False,
    )
    lead_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("leads.id"),
        nullable=False,
    )

    # Amounts
    sale_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    commission_percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    agent_commission: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    company_commission: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    status: Mapped[DealStatus] = mapped_column(
        String(20),
        default=DealStatus.PENDING,
        server_default="pending",
    )
    deal_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    agent_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=True,
        index=True,
    )
    created_by: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("users.id"))

    # Relationships
    property: Mapped["Property"] = relationship("Property")
    lead: Mapped["Lead"] = relationship("Lead")

    def __repr__(self) -> str:
        return f"<Deal(id={self.id}, sale_price={self.sale_price}, status={self.status})>"
