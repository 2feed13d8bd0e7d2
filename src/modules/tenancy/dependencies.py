"""Route guards that scope every request to a single app."""

import uuid

from fastapi import Depends

from src.exceptions import ForbiddenException
from src.modules.tenancy.auth import AuthenticatedUser, get_current_user


def require_app_access(
    app_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Allow the operator bound to ``app_id`` (from the route path) and platform admins."""
    if not user.can_manage(app_id):
        raise ForbiddenException("You do not have access to this app")
    return user


def require_platform_admin(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    if not user.is_platform_admin:
        raise ForbiddenException("Platform admin access required")
    return user
