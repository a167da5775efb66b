"""Authentication service."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import verify_password
from app.models.tenant import Tenant
from app.models.user import User
from app.services.user import get_user_by_email


async def authenticate_user(
    db: AsyncSession,
    email: str,
    password: str,
) -> User | None:
    """Authenticate user with email and password."""
    user = await get_user_by_email(db, email)

    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user


async def tenant_is_active(db: AsyncSession, user: User) -> bool:
    """Whether the user's tenant is active; platform users have none."""
    if user.tenant_id is None:
        return True

    result = await db.execute(select(Tenant.is_active).where(Tenant.id == user.tenant_id))
    return bool(result.scalar_one_or_none())
