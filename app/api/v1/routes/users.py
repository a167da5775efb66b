"""User routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import Context, CurrentUser, RequestedTenant
from app.core.exceptions import AuthorizationError
from app.core.permissions import ROLE_HIERARCHY, Role, Scope, can_create_role, resolve_scope
from app.core.security import verify_password
from app.core.tenancy import AccessContext, DataScope, scoped_query
from app.models.user import User
from app.schemas.user import (
    PasswordChange,
    UserCreate,
    UserListResponse,
    UserResponse,
    UserUpdate,
    UserUpdateMe,
)
from app.services import user as user_service

router = APIRouter(prefix="/users", tags=["Users"])

# Grants that allow creating accounts, in order of preference
USER_CREATE_GRANTS = (("users", "create"), ("team", "manage"))


# ============== Helper Functions ==============


def can_manage_user(context: AccessContext, target: User) -> bool:
    """Check if the caller can manage (update/delete) target user."""
    # Can't manage yourself through this (use /me endpoints)
    if context.user_id == target.id:
        return False
    return Role(target.role) in ROLE_HIERARCHY.get(context.role, [])


def user_create_grant(context: AccessContext) -> tuple[str, str]:
    """Pick the first account-creation grant the caller holds."""
    for resource, action in USER_CREATE_GRANTS:
        if resolve_scope(context.role, resource, action) is not None:
            return resource, action
    raise AuthorizationError("Not allowed to create users")


async def check_supervisor(db: AsyncSession, scope: DataScope, supervisor_id: UUID) -> None:
    """A supervisor reference must point at a supervisor visible in scope."""
    supervisor = await user_service.get_user_by_id(db, scope, supervisor_id)
    if not supervisor or supervisor.role != Role.SUPERVISOR:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Supervisor not found",
        )


# ============== Endpoints ==============


@router.get("", response_model=UserListResponse)
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
    tenant_id: RequestedTenant,
    role: Role | None = Query(None, description="Filter by role"),
    is_active: bool | None = Query(None, description="Filter by active status"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(20, ge=1, le=100, description="Max number of records"),
) -> UserListResponse:
    """
    List users visible to the caller.

    - SUPERADMIN: all accounts on the platform
    - ADMIN: users of the tenant
    - SUPERVISOR: the supervisor and their team
    """
    users, total = await scoped_query(
        context,
        "users",
        "read",
        lambda scope: user_service.get_users(
            db, scope, role=role, is_active=is_active, skip=skip, limit=limit
        ),
        tenant_id=tenant_id,
    )

    return UserListResponse(
        items=[UserResponse.model_validate(u) for u in users],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> UserResponse:
    """
    Create a new user in the caller's tenant.

    - Can only create roles allowed by ROLE_HIERARCHY
    - SUPERVISOR: new sales agents join the supervisor's team
    """
    resource, action = user_create_grant(context)

    if not can_create_role(context.role, user_data.role):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You don't have permission to create users with role '{user_data.role.value}'",
        )

    async def create(scope):
        if scope.scope == Scope.TEAM:
            user_data.supervisor_id = context.user_id
        elif user_data.supervisor_id is not None:
            await check_supervisor(db, scope, user_data.supervisor_id)

        if await user_service.get_user_by_email(db, user_data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered",
            )
        return await user_service.create_user(db, user_data, scope.tenant_id)

    user = await scoped_query(context, resource, action, create)
    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Get current user's profile."""
    return UserResponse.model_validate(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    user_data: UserUpdateMe,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: CurrentUser,
) -> UserResponse:
    """Update current user's profile (name, picture)."""
    # Convert to UserUpdate, preserving only set fields
    user_data_dict = user_data.model_dump(exclude_unset=True)
    update_data = UserUpdate.model_validate(user_data_dict)

    user = await user_service.update_user(db, current_user, update_data)
    return UserResponse.model_validate(user)


@router.post("/me/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_my_password(
    password_data: PasswordChange,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: CurrentUser,
) -> None:
    """Change current user's password."""
    if not verify_password(password_data.current_password, current_user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )

    await user_service.change_password(db, current_user, password_data.new_password)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> UserResponse:
    """Get a specific user by ID, if visible to the caller."""
    user = await scoped_query(
        context,
        "users",
        "read",
        lambda scope: user_service.get_user_by_id(db, scope, user_id),
    )

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return UserResponse.model_validate(user)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    user_data: UserUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> UserResponse:
    """
    Update a user.

    - Can only update users with a role you could create
    - Cannot change role to one you can't create
    """

    async def update(scope):
        user = await user_service.get_user_by_id(db, scope, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        if not can_manage_user(context, user):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You don't have permission to update this user",
            )

        # If changing role, check if allowed
        if user_data.role and user_data.role != user.role:
            if not can_create_role(context.role, user_data.role):
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"You can't assign role '{user_data.role.value}'",
                )

        if user_data.supervisor_id is not None:
            await check_supervisor(db, scope, user_data.supervisor_id)

        # Check if new email is taken
        if user_data.email and user_data.email != user.email:
            if await user_service.get_user_by_email(db, user_data.email):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Email already registered",
                )

        return await user_service.update_user(db, user, user_data)

    user = await scoped_query(context, "users", "update", update)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Context,
) -> None:
    """Deactivate a user (soft delete)."""

    async def deactivate(scope):
        user = await user_service.get_user_by_id(db, scope, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        if not can_manage_user(context, user):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You don't have permission to delete this user",
            )

        await user_service.deactivate_user(db, user)

    await scoped_query(context, "users", "delete", deactivate)
