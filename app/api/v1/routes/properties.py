"""Property routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import Context, RequestedTenant
from app.core.tenancy import scoped_query
from app.models.property import PropertyStatus, PropertyType
from app.schemas.property import (
    PropertyCreate,
    PropertyListResponse,
    PropertyResponse,
    PropertyUpdate,
)
from app.services import property as property_service
from app.services.activity import record_activity

router = APIRouter(prefix="/properties", tags=["Properties"])


# ============== Helper Functions ==============


def property_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Property not found",
    )


# ============== Endpoints ==============


@router.get("", response_model=PropertyListResponse)
async def list_properties(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
    tenant_id: RequestedTenant,
    property_type: PropertyType | None = Query(None, alias="type", description="Filter by type"),
    location: str | None = Query(None, description="Search by location"),
    property_status: PropertyStatus | None = Query(
        None, alias="status", description="Filter by status"
    ),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=100, description="Max number of records"),
) -> PropertyListResponse:
    """List property listings of the caller's tenant."""
    listings, total = await scoped_query(
        context,
        "properties",
        "read",
        lambda scope: property_service.get_properties(
            db,
            scope,
            type=property_type,
            location=location,
            status=property_status,
            skip=skip,
            limit=limit,
        ),
        tenant_id=tenant_id,
    )

    return PropertyListResponse(
        items=[PropertyResponse.model_validate(p) for p in listings],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
    property_data: PropertyCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> PropertyResponse:
    """List a new property (ADMIN only)."""
    listing = await scoped_query(
        context,
        "properties",
        "create",
        lambda scope: property_service.create_property(
            db, scope, property_data, context.user_id
        ),
    )
    response = PropertyResponse.model_validate(listing)

    await record_activity(
        db, context.tenant_id, context.user_id, "property", response.id, "created",
        f"Property {response.title} listed",
    )
    return response


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(
    property_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> PropertyResponse:
    """Get a specific property by ID."""
    listing = await scoped_query(
        context,
        "properties",
        "read",
        lambda scope: property_service.get_property_by_id(db, scope, property_id),
    )

    if not listing:
        raise property_not_found()

    return PropertyResponse.model_validate(listing)


@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: UUID,
    property_data: PropertyUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> PropertyResponse:
    """Update a property (ADMIN only)."""

    async def update(scope):
        listing = await property_service.get_property_by_id(db, scope, property_id)
        if not listing:
            raise property_not_found()
        return await property_service.update_property(db, listing, property_data)

    listing = await scoped_query(context, "properties", "update", update)
    response = PropertyResponse.model_validate(listing)

    changed = ", ".join(sorted(property_data.model_dump(exclude_unset=True))) or "nothing"
    await record_activity(
        db, context.tenant_id, context.user_id, "property", response.id, "updated",
        f"Property {response.title} updated: {changed}",
    )
    return response


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_property(
    property_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> None:
    """Delete a property (ADMIN only)."""

    async def delete(scope):
        listing = await property_service.get_property_by_id(db, scope, property_id)
        if not listing:
            raise property_not_found()
        try:
            await property_service.delete_property(db, listing)
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            )

    await scoped_query(context, "properties", "delete", delete)
