"""Operator identity from bearer tokens.

Operators log in through an external service which signs a JWT carrying the
operator id (``sub``), email, and the app the operator administers. Platform
admins carry ``is_platform_admin`` instead of an app binding.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from src.config import settings
from src.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)

DEFAULT_ROLE = "OPERATOR"


@dataclass
class AuthenticatedUser:
    id: uuid.UUID
    email: str
    app_id: uuid.UUID | None
    role: str = DEFAULT_ROLE
    is_platform_admin: bool = False

    def can_manage(self, app_id: uuid.UUID) -> bool:
        return self.is_platform_admin or self.app_id == app_id


def issue_token(user: AuthenticatedUser, expires_in: timedelta = timedelta(hours=8)) -> str:
    """Sign a token for *user*; the seeder prints one for the demo operator."""
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "is_platform_admin": user.is_platform_admin,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    if user.app_id is not None:
        claims["app_id"] = str(user.app_id)
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def _verified_claims(token: str) -> dict:
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        logger.warning("Rejected bearer token: %s", exc)
        raise UnauthorizedException("Invalid or expired token") from exc


def _operator_from_claims(claims: dict) -> AuthenticatedUser:
    try:
        app_claim = claims.get("app_id")
        return AuthenticatedUser(
            id=uuid.UUID(claims["sub"]),
            email=claims["email"],
            app_id=uuid.UUID(app_claim) if app_claim else None,
            role=claims.get("role", DEFAULT_ROLE),
            is_platform_admin=bool(claims.get("is_platform_admin", False)),
        )
    except (KeyError, ValueError) as exc:
        raise UnauthorizedException("Token is missing required claims") from exc


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> AuthenticatedUser:
    if credentials is None:
        raise UnauthorizedException("Authentication required")

    user = _operator_from_claims(_verified_claims(credentials.credentials))
    request.state.user = user
    return user
