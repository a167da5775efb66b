"""Tenant routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import Context
from app.core.logging_config import get_logger
from app.core.tenancy import scoped_query
from app.schemas.tenant import (
    TenantBrandingUpdate,
    TenantCreate,
    TenantListResponse,
    TenantResponse,
    TenantUpdate,
)
from app.services import tenant as tenant_service
from app.services import user as user_service

logger = get_logger(__name__)

router = APIRouter(prefix="/tenants", tags=["Tenants"])


# ============== Endpoints ==============


@router.get("", response_model=TenantListResponse)
async def list_tenants(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
    is_active: bool | None = Query(None, description="Filter by active status"),
    search: str | None = Query(None, description="Search by name"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(20, ge=1, le=100, description="Max number of records"),
) -> TenantListResponse:
    """List tenants (SUPERADMIN only)."""
    tenants, total = await scoped_query(
        context,
        "tenants",
        "read",
        lambda scope: tenant_service.get_tenants(
            db, scope, is_active=is_active, search=search, skip=skip, limit=limit
        ),
    )

    return TenantListResponse(
        items=[TenantResponse.model_validate(t) for t in tenants],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    tenant_data: TenantCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> TenantResponse:
    """
    Onboard a new tenant together with its first admin (SUPERADMIN only).
    """

    async def onboard(scope):
        if await tenant_service.get_tenant_by_subdomain(db, tenant_data.subdomain):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Subdomain already taken",
            )
        if await user_service.get_user_by_email(db, tenant_data.admin_email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered",
            )
        return await tenant_service.create_tenant(db, tenant_data)

    tenant, admin = await scoped_query(context, "tenants", "create", onboard)
    logger.info("Tenant %s onboarded with admin %s", tenant.subdomain, admin.email)
    return TenantResponse.model_validate(tenant)


@router.patch("/current/branding", response_model=TenantResponse)
async def update_branding(
    branding_data: TenantBrandingUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> TenantResponse:
    """Update company name, logo and colors of the caller's tenant (ADMIN)."""

    async def update(scope):
        tenant = await tenant_service.get_tenant_by_id(db, scope, scope.tenant_id)
        if not tenant:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Tenant not found",
            )
        return await tenant_service.update_tenant(db, tenant, branding_data)

    tenant = await scoped_query(context, "branding", "manage", update)
    return TenantResponse.model_validate(tenant)


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(
    tenant_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> TenantResponse:
    """Get a specific tenant by ID (SUPERADMIN only)."""
    tenant = await scoped_query(
        context,
        "tenants",
        "read",
        lambda scope: tenant_service.get_tenant_by_id(db, scope, tenant_id),
    )

    if not tenant:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tenant not found",
        )

    return TenantResponse.model_validate(tenant)


@router.patch("/{tenant_id}", response_model=TenantResponse)
async def update_tenant(
    tenant_id: UUID,
    tenant_data: TenantUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> TenantResponse:
    """Update plan, fee, domain or status of a tenant (SUPERADMIN only)."""

    async def update(scope):
        tenant = await tenant_service.get_tenant_by_id(db, scope, tenant_id)
        if not tenant:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Tenant not found",
            )
        return await tenant_service.update_tenant(db, tenant, tenant_data)

    tenant = await scoped_query(context, "tenants", "update", update)
    return TenantResponse.model_validate(tenant)


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tenant(
    tenant_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> None:
    """Deactivate a tenant (soft delete, SUPERADMIN only)."""

    async def deactivate(scope):
        tenant = await tenant_service.get_tenant_by_id(db, scope, tenant_id)
        if not tenant:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Tenant not found",
            )
        await tenant_service.deactivate_tenant(db, tenant)

    await scoped_query(context, "tenants", "delete", deactivate)
