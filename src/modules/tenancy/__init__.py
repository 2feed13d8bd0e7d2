"""Tenancy module: apps (tenants), operator authentication, and app scoping."""

from src.modules.tenancy.app_service import AppService
from src.modules.tenancy.auth import AuthenticatedUser, get_current_user
from src.modules.tenancy.dependencies import require_app_access, require_platform_admin

__all__ = [
    "AppService",
    "AuthenticatedUser",
    "get_current_user",
    "require_app_access",
    "require_platform_admin",
]
