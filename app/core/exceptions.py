"""Typed errors raised by the access-control core.

The HTTP layer maps these to status codes in ``main.py``; nothing in the
core writes a response itself.
"""


class CRMError(Exception):
    """Base class for CRM domain errors."""


class AuthorizationError(CRMError):
    """The caller's role/scope does not hold the required grant."""

    def __init__(self, message: str = "Not enough permissions") -> None:
        super().__init__(message)
        self.message = message


class TenantMismatch(AuthorizationError):
    """A caller-supplied tenant id disagrees with the session tenant."""

    def __init__(self, message: str = "Cannot access data from another tenant") -> None:
        super().__init__(message)


class MissingTenantContext(CRMError):
    """A tenant-bound call arrived without a tenant id."""

    def __init__(self, message: str = "User not associated with a tenant") -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(CRMError):
    """The role-permission table is inconsistent."""
