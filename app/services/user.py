"""User service."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.permissions import Role
from app.core.security import get_password_hash
from app.core.tenancy import DataScope
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate


async def get_user_by_id(
    db: AsyncSession,
    scope: DataScope,
    user_id: UUID,
) -> User | None:
    """Get user by ID, as visible in scope."""
    query = scope.apply(select(User), User, User.id).where(User.id == user_id)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get user by email."""
    result = await db.execute(
        select(User).where(User.email == email.lower())
    )
    return result.scalar_one_or_none()


async def get_users(
    db: AsyncSession,
    scope: DataScope,
    *,
    role: Role | None = None,
    is_active: bool | None = None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[User], int]:
    """Get list of users visible in scope with optional filters."""
    query = scope.apply(select(User), User, User.id)

    # Apply filters
    if role is not None:
        query = query.where(User.role == role)

    if is_active is not None:
        query = query.where(User.is_active == is_active)

    # Get total count
    count_query = select(func.count()).select_from(query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    # Get paginated results
    query = query.order_by(User.created_at.desc()).offset(skip).limit(limit)
    result = await db.execute(query)
    users = list(result.scalars().all())

    return users, total


async def create_user(
    db: AsyncSession,
    user_data: UserCreate,
    tenant_id: UUID,
) -> User:
    """Create a new user in a tenant."""
    user = User(
        email=user_data.email,
        password_hash=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        role=user_data.role,
        tenant_id=tenant_id,
        supervisor_id=user_data.supervisor_id,
        profile_image_url=user_data.profile_image_url,
    )

    db.add(user)
    await db.commit()
    await db.refresh(user)

    return user


async def update_user(
    db: AsyncSession,
    user: User,
    user_data: UserUpdate,
) -> User:
    """Update a user."""
    update_data = user_data.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        setattr(user, field, value)

    await db.commit()
    await db.refresh(user)

    return user


async def change_password(
    db: AsyncSession,
    user: User,
    new_password: str,
) -> User:
    """Change user's password."""
    user.password_hash = get_password_hash(new_password)
    await db.commit()
    await db.refresh(user)
    return user


async def deactivate_user(db: AsyncSession, user: User) -> User:
    """Soft delete a user by setting is_active to False."""
    user.is_active = False
    await db.commit()
    await db.refresh(user)
    return user
