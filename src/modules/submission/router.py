"""Submission module API router: registrant submissions and the resolved table view."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.app import limiter
from src.database.session import get_db
from src.models.enums import RegistrationStatus
from src.modules.submission.schemas import (
    StatusUpdate,
    SubmissionCreate,
    SubmissionPatch,
    SubmissionResponse,
    SubmissionTable,
)
from src.modules.submission.service import SubmissionService
from src.modules.tenancy.auth import AuthenticatedUser
from src.modules.tenancy.dependencies import require_app_access

router = APIRouter(prefix="/apps/{app_id}/submissions", tags=["submissions"])


@router.post("", response_model=SubmissionResponse, status_code=201)
@limiter.limit("30/minute")
async def create_submission(
    request: Request,
    app_id: uuid.UUID,
    data: SubmissionCreate,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> SubmissionResponse:
    svc = SubmissionService(db)
    submission = await svc.create_submission(app_id, data)
    return SubmissionResponse.model_validate(submission)


@router.get("", response_model=SubmissionTable)
@limiter.limit("60/minute")
async def list_submissions(
    request: Request,
    app_id: uuid.UUID,
    category_id: uuid.UUID | None = Query(None),
    status: RegistrationStatus | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> SubmissionTable:
    """Resolved submissions with one header set across every row's form."""
    svc = SubmissionService(db)
    return await svc.list_resolved(
        app_id, category_id=category_id, status=status, limit=limit, offset=offset
    )


@router.get("/{submission_id}", response_model=SubmissionResponse)
@limiter.limit("120/minute")
async def get_submission(
    request: Request,
    app_id: uuid.UUID,
    submission_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> SubmissionResponse:
    svc = SubmissionService(db)
    submission = await svc.get_submission(app_id, submission_id)
    return SubmissionResponse.model_validate(submission)


@router.patch("/{submission_id}", response_model=SubmissionResponse)
@limiter.limit("30/minute")
async def patch_submission(
    request: Request,
    app_id: uuid.UUID,
    submission_id: uuid.UUID,
    data: SubmissionPatch,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> SubmissionResponse:
    svc = SubmissionService(db)
    submission = await svc.patch_submission(app_id, submission_id, data)
    return SubmissionResponse.model_validate(submission)


@router.patch("/{submission_id}/status", response_model=SubmissionResponse)
@limiter.limit("30/minute")
async def update_submission_status(
    request: Request,
    app_id: uuid.UUID,
    submission_id: uuid.UUID,
    data: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> SubmissionResponse:
    svc = SubmissionService(db)
    submission = await svc.update_status(app_id, submission_id, data.status)
    return SubmissionResponse.model_validate(submission)
