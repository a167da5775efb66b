"""API v1 router aggregating all route modules."""

from fastapi import APIRouter

from app.api.v1.routes import (
    activities,
    auth,
    dashboard,
    deals,
    exchange_rates,
    leads,
    properties,
    tenants,
    users,
)

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(dashboard.router)
api_router.include_router(tenants.router)
api_router.include_router(users.router)
api_router.include_router(leads.router)
api_router.include_router(properties.router)
api_router.include_router(deals.router)
api_router.include_router(exchange_rates.router)
api_router.include_router(activities.router)
