"""Dependencies for FastAPI routes."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import decode_access_token
from app.core.tenancy import AccessContext
from app.models.user import User
from app.services.auth import tenant_is_active

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login/form")


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Get current authenticated user from JWT token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_access_token(token)
    if payload is None or payload.get("type") != "access":
        raise credentials_exception

    user_id: str | None = payload.get("sub")
    if user_id is None:
        raise credentials_exception

    try:
        uuid_id = UUID(user_id)
    except ValueError:
        raise credentials_exception

    result = await db.execute(select(User).where(User.id == uuid_id))
    user = result.scalar_one_or_none()

    if user is None:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
        )

    if not await tenant_is_active(db, user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Tenant is deactivated",
        )

    return user


async def get_access_context(
    current_user: Annotated[User, Depends(get_current_user)],
) -> AccessContext:
    """Role and tenant of the caller, taken only from the stored user row."""
    return AccessContext.from_user(current_user)


async def get_requested_tenant(
    context: Annotated[AccessContext, Depends(get_access_context)],
    tenant_id: UUID | None = Query(None, description="Tenant the request is scoped to"),
) -> UUID | None:
    """Tenant named by the request; only tenant-bound users may name one."""
    if tenant_id is not None and context.tenant_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Platform accounts cannot query tenant business data",
        )
    return tenant_id


# Common dependency aliases
CurrentUser = Annotated[User, Depends(get_current_user)]
Context = Annotated[AccessContext, Depends(get_access_context)]
RequestedTenant = Annotated[UUID | None, Depends(get_requested_tenant)]
