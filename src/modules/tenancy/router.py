"""Tenancy module API router: apps and their locking policy."""

import uuid

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.app import limiter
from src.database.session import get_db
from src.modules.category.schemas import LockingPolicy
from src.modules.tenancy.app_service import AppService
from src.modules.tenancy.auth import AuthenticatedUser
from src.modules.tenancy.dependencies import require_app_access, require_platform_admin
from src.modules.tenancy.schemas import AppCreate, AppResponse, LockingPolicyResponse

router = APIRouter(prefix="/apps", tags=["apps"])


@router.post("", response_model=AppResponse, status_code=201)
@limiter.limit("30/minute")
async def create_app(
    request: Request,
    body: AppCreate,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_platform_admin),
) -> AppResponse:
    svc = AppService(db)
    app = await svc.create_app(body.name)
    return AppResponse.model_validate(app)


@router.get("/{app_id}", response_model=AppResponse)
@limiter.limit("120/minute")
async def get_app(
    request: Request,
    app_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> AppResponse:
    svc = AppService(db)
    app = await svc.get_app(app_id)
    return AppResponse.model_validate(app)


@router.get("/{app_id}/locking", response_model=LockingPolicyResponse)
@limiter.limit("120/minute")
async def get_locking(
    request: Request,
    app_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> LockingPolicyResponse:
    """Get the app's locking policy; an app without one reports every level unlocked."""
    svc = AppService(db)
    policy = await svc.get_locking_policy(app_id)
    return LockingPolicyResponse(app_id=app_id, locking=policy or LockingPolicy())


@router.put("/{app_id}/locking", response_model=LockingPolicyResponse)
@limiter.limit("30/minute")
async def set_locking(
    request: Request,
    app_id: uuid.UUID,
    body: LockingPolicy,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> LockingPolicyResponse:
    svc = AppService(db)
    policy = await svc.set_locking_policy(app_id, body)
    return LockingPolicyResponse(app_id=app_id, locking=policy)
