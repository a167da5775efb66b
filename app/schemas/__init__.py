"""Pydantic schemas."""

from app.schemas.auth import (
    Token,
    TokenData,
    LoginRequest,
    RefreshRequest,
)
from app.schemas.user import (
    UserCreate,
    UserUpdate,
    UserUpdateMe,
    UserResponse,
    UserListResponse,
    PasswordChange,
)
from app.schemas.dashboard import DashboardStats, PlatformStats, StatsRecord

__all__ = [
    # Auth
    "Token",
    "TokenData",
    "LoginRequest",
    "RefreshRequest",
    # User
    "UserCreate",
    "UserUpdate",
    "UserUpdateMe",
    "UserResponse",
    "UserListResponse",
    "PasswordChange",
    # Dashboard
    "DashboardStats",
    "PlatformStats",
    "StatsRecord",
]
