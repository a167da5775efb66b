"""Tenant isolation for data access.

Every read or write of tenant business data goes through ``scoped_query``,
which checks the caller's grant, pins the query to the session tenant and,
for team/own/assigned grants, to the rows the caller owns. Superadmins get
a ``PlatformView`` instead, which only admits platform-level tables.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar
from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthorizationError, MissingTenantContext, TenantMismatch
from app.core.logging_config import get_logger
from app.core.permissions import Role, Scope, authorize, resolve_scope
from app.models.user import User

logger = get_logger(__name__)

T = TypeVar("T")

# Tables a superadmin may read: tenant metadata and accounts, no business rows
PLATFORM_TABLES = frozenset({"tenants", "users"})


@dataclass(frozen=True)
class AccessContext:
    """Who is calling, as resolved from the authenticated session."""

    user_id: UUID
    role: Role
    tenant_id: UUID | None = None
    supervisor_id: UUID | None = None

    @classmethod
    def from_user(cls, user: User) -> "AccessContext":
        return cls(
            user_id=user.id,
            role=Role(user.role),
            tenant_id=user.tenant_id,
            supervisor_id=user.supervisor_id,
        )


def team_member_ids(supervisor_id: UUID, tenant_id: UUID) -> Select:
    """Subquery of a supervisor's team: the supervisor and their agents."""
    return select(User.id).where(
        User.tenant_id == tenant_id,
        or_(User.id == supervisor_id, User.supervisor_id == supervisor_id),
    )


@dataclass(frozen=True)
class TenantScope:
    """Filter handed to query functions for tenant-bound callers."""

    tenant_id: UUID
    user_id: UUID
    scope: Scope

    def owner_filter(self, owner_column):
        """Predicate limiting owner_column to the caller (or team), or None."""
        if owner_column is None or self.scope == Scope.TENANT:
            return None
        if self.scope == Scope.TEAM:
            return owner_column.in_(team_member_ids(self.user_id, self.tenant_id))
        return owner_column == self.user_id

    def apply(self, query: Select, model, owner_column=None) -> Select:
        """Restrict query to the tenant and, for narrow scopes, to owned rows.

        Models without an owner column (property listings) are only bound
        by the tenant.
        """
        tenant_column = model.id if model.__tablename__ == "tenants" else model.tenant_id
        query = query.where(tenant_column == self.tenant_id)

        owner = self.owner_filter(owner_column)
        return query if owner is None else query.where(owner)


@dataclass(frozen=True)
class PlatformView:
    """Filter handed to query functions for superadmins."""

    user_id: UUID
    scope: Scope = Scope.ALL
    tenant_id: None = None

    def apply(self, query: Select, model, owner_column=None) -> Select:
        if model.__tablename__ not in PLATFORM_TABLES:
            raise AuthorizationError(
                f"Platform scope cannot read tenant data from '{model.__tablename__}'"
            )
        return query


DataScope = TenantScope | PlatformView


async def scoped_query(
    context: AccessContext,
    resource: str,
    action: str,
    query_fn: Callable[[DataScope], Awaitable[T]],
    *,
    tenant_id: UUID | str | None = None,
    scope: Scope | None = None,
) -> T:
    """Run query_fn inside the caller's tenant boundary.

    ``tenant_id`` is the tenant a request asked for (if any); it must match
    the session tenant. ``scope`` defaults to the scope the caller's role
    holds for resource:action.
    """
    if context.role == Role.SUPERADMIN:
        if tenant_id is not None:
            raise ValueError("Platform-level queries do not take a tenant id")
    else:
        if not context.tenant_id:
            raise MissingTenantContext()
        if tenant_id is not None and str(tenant_id) != str(context.tenant_id):
            logger.warning(
                "Tenant mismatch: user %s bound to tenant %s requested tenant %s for %s:%s",
                context.user_id,
                context.tenant_id,
                tenant_id,
                resource,
                action,
            )
            raise TenantMismatch()

    requested = scope or resolve_scope(context.role, resource, action)
    if requested is None or not authorize(context.role, resource, action, requested):
        logger.info(
            "Denied %s:%s at scope %s for user %s (%s)",
            resource,
            action,
            requested.value if requested else None,
            context.user_id,
            context.role.value,
        )
        raise AuthorizationError(f"Not allowed to {action} {resource}")

    if context.role == Role.SUPERADMIN:
        return await query_fn(PlatformView(user_id=context.user_id))

    # An ``all`` grant never widens a tenant-bound caller past its tenant
    if requested == Scope.ALL:
        requested = Scope.TENANT
    return await query_fn(
        TenantScope(tenant_id=context.tenant_id, user_id=context.user_id, scope=requested)
    )


async def ensure_owner_in_scope(
    db: AsyncSession,
    data_scope: DataScope,
    owner_id: UUID,
) -> User:
    """Check that owner_id (an assignee or deal agent) is within the caller's scope."""
    if isinstance(data_scope, PlatformView):
        raise AuthorizationError("Platform scope cannot own tenant data")

    result = await db.execute(
        select(User).where(
            User.id == owner_id,
            User.tenant_id == data_scope.tenant_id,
            User.is_active.is_(True),
        )
    )
    owner = result.scalar_one_or_none()
    if owner is None:
        raise AuthorizationError("User is not an active member of your tenant")

    if data_scope.scope == Scope.TEAM:
        if owner.id != data_scope.user_id and owner.supervisor_id != data_scope.user_id:
            raise AuthorizationError("User is not a member of your team")
    elif data_scope.scope in (Scope.OWN, Scope.ASSIGNED):
        if owner.id != data_scope.user_id:
            raise AuthorizationError("You can only act on your own records")

    return owner
