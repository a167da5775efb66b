"""Exchange rate model."""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel


class ExchangeRate(BaseModel):
    """USD buy/sell rates a tenant quotes; one row per tenant."""

    __tablename__ = "exchange_rates"

    tenant_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("tenants.id"),
        nullable=False,
        unique=True,
    )
    buy_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)  # Company buys USD
    sell_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)  # Company sells USD
    updated_by: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("users.id"))

    def __repr__(self) -> str:
        return f"<ExchangeRate(tenant={self.tenant_id}, buy={self.buy_rate}, sell={self.sell_rate})>"
