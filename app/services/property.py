"""Property service - business logic for listings."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.tenancy import DataScope, TenantScope
from app.models.deal import Deal
from app.models.property import Property, PropertyStatus, PropertyType
from app.schemas.property import PropertyCreate, PropertyUpdate


async def get_property_by_id(
    db: AsyncSession,
    scope: DataScope,
    property_id: UUID,
) -> Property | None:
    """Get property by ID if it is visible in scope."""
    query = scope.apply(select(Property), Property).where(Property.id == property_id)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_properties(
    db: AsyncSession,
    scope: DataScope,
    *,
    type: PropertyType | None = None,
    location: str | None = None,
    status: PropertyStatus | None = None,
    skip: int = 0,
    limit: int = 100,
) -> tuple[list[Property], int]:
    """Get properties visible in scope with filters."""
    query = scope.apply(select(Property), Property)

    # Apply filters
    if type:
        query = query.where(Property.type == type)
    if location:
        query = query.where(Property.location.ilike(f"%{location}%"))
    if status:
        query = query.where(Property.status == status)

    # Count total
    count_query = select(func.count()).select_from(query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    query = query.order_by(Property.created_at.desc()).offset(skip).limit(limit)
    result = await db.execute(query)
    properties = list(result.scalars().all())

    return properties, total


async def create_property(
    db: AsyncSession,
    scope: TenantScope,
    property_data: PropertyCreate,
    created_by: UUID,
) -> Property:
    """List a new property in the scope's tenant."""
    listing = Property(
        tenant_id=scope.tenant_id,
        created_by=created_by,
        **property_data.model_dump(),
    )
    db.add(listing)
    await db.commit()
    await db.refresh(listing)

    return listing


async def update_property(
    db: AsyncSession,
    listing: Property,
    property_data: PropertyUpdate,
) -> Property:
    """Update an existing property."""
    update_data = property_data.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        setattr(listing, field, value)

    await db.commit()
    await db.refresh(listing)

    return listing


async def delete_property(db: AsyncSession, listing: Property) -> None:
    """
    Delete a property.

    Raises:
        ValueError: If a deal references the property.
    """
    result = await db.execute(
        select(func.count()).select_from(Deal).where(Deal.property_id == listing.id)
    )
    if result.scalar():
        raise ValueError("Cannot delete a property with recorded deals")

    await db.delete(listing)
    await db.commit()
