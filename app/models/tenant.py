"""Tenant model."""

from decimal import Decimal

from sqlalchemy import Boolean, Numeric, String, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import BaseModel


class Tenant(BaseModel):
    """Tenant model - one real estate company on the platform."""

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    subdomain: Mapped[str | None] = mapped_column(String(63), unique=True)
    custom_domain: Mapped[str | None] = mapped_column(String(255))

    # Branding
    logo_url: Mapped[str | None] = mapped_column(String(500))
    primary_color: Mapped[str] = mapped_column(
        String(7),
        default="#2563EB",
        server_default="#2563EB",
    )
    secondary_color: Mapped[str] = mapped_column(
        String(7),
        default="#64748B",
        server_default="#64748B",
    )

    # Billing
    plan: Mapped[str] = mapped_column(String(50), default="basic", server_default="basic")
    monthly_fee: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        default=Decimal("0"),
        server_default="0",
    )

    # Company share of the agent commission pool; NULL uses the platform default
    company_share_rate: Mapped[Decimal | None] = mapped_column(Numeric(5, 4), nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        server_default=true(),
    )

    # Relationships
    users: Mapped[list["User"]] = relationship("User", back_populates="tenant")

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name={self.name})>"
