# Database models

from app.models.tenant import Tenant
from app.models.user import User
from app.models.property import Property, PropertyStatus, PropertyType
from app.models.lead import Lead, LeadStatus
from app.models.deal import Deal, DealStatus
from app.models.exchange_rate import ExchangeRate
from app.models.activity import Activity

__all__ = [
    "Tenant",
    "User",
    "Property",
    "PropertyStatus",
    "PropertyType",
    "Lead",
    "LeadStatus",
    "Deal",
    "DealStatus",
    "ExchangeRate",
    "Activity",
]
