"""Commission split calculations."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from app.core.config import settings
from app.models.tenant import Tenant

CENT = Decimal("0.01")


@dataclass(frozen=True)
class CommissionSplit:
    """Agent commission pool and the company's share of it."""

    agent_commission: Decimal
    company_commission: Decimal


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Quantize to currency precision (2 decimal places)."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def split_commission(
    sale_price: Decimal | int | float | str,
    commission_percentage: Decimal | int | float | str,
    company_share_rate: Decimal | int | float | str,
) -> CommissionSplit:
    """
    Split a sale's commission.

    agent_commission = sale_price * commission_percentage / 100
    company_commission = agent_commission * company_share_rate

    All arithmetic is Decimal; results are rounded half-up to cents.
    """
    agent_commission = to_money(
        Decimal(str(sale_price)) * Decimal(str(commission_percentage)) / 100
    )
    company_commission = to_money(agent_commission * Decimal(str(company_share_rate)))
    return CommissionSplit(agent_commission, company_commission)


def company_share_rate_for(tenant: Tenant | None) -> Decimal:
    """Tenant's configured company share, falling back to the platform default."""
    if tenant is not None and tenant.company_share_rate is not None:
        return Decimal(tenant.company_share_rate)
    return settings.COMPANY_SHARE_RATE
