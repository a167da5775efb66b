"""User roles and permissions."""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import NamedTuple

from app.core.exceptions import ConfigurationError


class Role(str, Enum):
    """User roles in the system."""

    SUPERADMIN = "superadmin"  # Platform operator, sees only platform aggregates
    ADMIN = "admin"  # Full control inside one tenant
    SUPERVISOR = "supervisor"  # Manages a team of sales agents
    SALES = "sales"  # Works assigned leads and own deals


class Scope(str, Enum):
    """Breadth of data a grant applies to."""

    ALL = "all"
    TENANT = "tenant"
    TEAM = "team"
    OWN = "own"
    ASSIGNED = "assigned"


class Permission(NamedTuple):
    """A single grant: ``resource:action`` at ``scope``."""

    resource: str
    action: str
    scope: Scope

    @classmethod
    def parse(cls, grant: str) -> "Permission":
        """Parse a ``resource:action:scope`` grant string."""
        try:
            resource, action, scope = grant.split(":")
            return cls(resource, action, Scope(scope))
        except ValueError as exc:
            raise ConfigurationError(f"Malformed grant '{grant}'") from exc


# Grants by role, written as resource:action:scope
ROLE_GRANTS = {
    Role.SUPERADMIN: [
        "tenants:create:all",
        "tenants:read:all",
        "tenants:update:all",
        "tenants:delete:all",
        "system:configure:all",
        "billing:manage:all",
        "leads:read:all",
        "properties:read:all",
        "deals:read:all",
        "users:read:all",
        "reports:read:all",
    ],
    Role.ADMIN: [
        "company:configure:tenant",
        "branding:manage:tenant",
        "currency:set:tenant",
        "exchange_rates:manage:tenant",
        "exchange_rates:read:tenant",
        "users:create:tenant",
        "users:read:tenant",
        "users:update:tenant",
        "users:delete:tenant",
        "leads:create:tenant",
        "leads:read:tenant",
        "leads:update:tenant",
        "leads:delete:tenant",
        "leads:assign:tenant",
        "properties:create:tenant",
        "properties:read:tenant",
        "properties:update:tenant",
        "properties:delete:tenant",
        "deals:create:tenant",
        "deals:read:tenant",
        "deals:update:tenant",
        "deals:approve:tenant",
        "reports:read:tenant",
        "reports:export:tenant",
        "commissions:read:tenant",
        "activities:read:tenant",
    ],
    Role.SUPERVISOR: [
        "leads:read:team",
        "leads:update:team",
        "leads:assign:team",
        "properties:read:team",
        "properties:match:team",
        "deals:create:team",
        "deals:read:team",
        "deals:update:team",
        "deals:approve:team",
        "team:manage:team",
        "users:read:team",
        "reports:read:team",
        "reports:export:team",
        "commissions:read:team",
        "activities:read:team",
        "exchange_rates:read:tenant",
    ],
    Role.SALES: [
        "leads:read:assigned",
        "leads:update:assigned",
        "properties:read:tenant",
        "properties:match:assigned",
        "deals:create:own",
        "deals:read:own",
        "deals:update:own",
        "activities:create:own",
        "activities:read:own",
        "activities:update:own",
        "dashboard:read:own",
        "commissions:read:own",
        "exchange_rates:read:tenant",
    ],
}


# Coarse privilege rank, only for "at least this privileged" checks
ROLE_RANK = {
    Role.SUPERADMIN: 4,
    Role.ADMIN: 3,
    Role.SUPERVISOR: 2,
    Role.SALES: 1,
}


# Which roles can create which other roles
ROLE_HIERARCHY = {
    Role.SUPERADMIN: [Role.ADMIN],  # Only through tenant onboarding
    Role.ADMIN: [Role.SUPERVISOR, Role.SALES],
    Role.SUPERVISOR: [Role.SALES],
    Role.SALES: [],
}


def _normalize_grants(grants: Iterable[str | Permission]) -> tuple[Permission, ...]:
    """Collapse a role's raw grants to one Permission per (resource, action)."""
    by_key: dict[tuple[str, str], set[Scope]] = {}
    for grant in grants:
        permission = grant if isinstance(grant, Permission) else Permission.parse(grant)
        by_key.setdefault((permission.resource, permission.action), set()).add(
            Scope(permission.scope)
        )

    normalized = []
    for (resource, action), scopes in by_key.items():
        if Scope.ALL in scopes:
            scope = Scope.ALL
        elif len(scopes) == 1:
            (scope,) = scopes
        else:
            raise ConfigurationError(
                f"Conflicting scopes {sorted(s.value for s in scopes)} "
                f"for '{resource}:{action}'"
            )
        normalized.append(Permission(resource, action, scope))
    return tuple(normalized)


def build_permission_table(
    raw: Mapping[Role, Iterable[str | Permission]],
) -> dict[Role, tuple[Permission, ...]]:
    """Build the normalized role -> permissions table.

    Raises ConfigurationError for malformed grants or a (resource, action)
    pair granted at two different scopes, unless one of them is ``all``.
    """
    table = {}
    for role, grants in raw.items():
        try:
            table[Role(role)] = _normalize_grants(grants)
        except ConfigurationError as exc:
            raise ConfigurationError(f"Role '{Role(role).value}': {exc}") from exc
    return table


ROLE_PERMISSIONS = build_permission_table(ROLE_GRANTS)


def get_permissions(role: Role | str) -> list[Permission]:
    """Return the grants held by a role; unknown roles hold none."""
    try:
        role = Role(role)
    except (TypeError, ValueError):
        return []
    return list(ROLE_PERMISSIONS.get(role, ()))


def resolve_scope(role: Role | str, resource: str, action: str) -> Scope | None:
    """Return the scope at which a role holds resource:action, if any."""
    for permission in get_permissions(role):
        if permission.resource == resource and permission.action == action:
            return permission.scope
    return None


def authorize(
    role: Role | str,
    resource: str,
    action: str,
    requested_scope: Scope | str,
) -> bool:
    """Check if a role may perform action on resource at requested_scope."""
    granted = resolve_scope(role, resource, action)
    if granted is None:
        return False
    return granted == Scope.ALL or granted == requested_scope


def has_permission(role: Role | str, permission: str) -> bool:
    """Check if a role holds ``resource:action`` at any scope."""
    resource, _, action = permission.partition(":")
    return resolve_scope(role, resource, action) is not None


def has_higher_role(role: Role | str, required: Role | str) -> bool:
    """Check if role ranks at least as high as required."""
    return ROLE_RANK.get(role, 0) >= ROLE_RANK.get(required, 0) > 0


def can_create_role(creator_role: Role, target_role: Role) -> bool:
    """Check if a role can create another role."""
    return target_role in ROLE_HIERARCHY.get(creator_role, [])
