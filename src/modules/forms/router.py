"""Forms module API router: the registration form attached to a category."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.app import limiter
from src.database.session import get_db
from src.modules.forms.schemas import (
    FormSchemaDraft,
    FormSchemaResponse,
    FormSchemaSave,
    PresetInjectRequest,
)
from src.modules.forms.service import FormSchemaService
from src.modules.tenancy.auth import AuthenticatedUser
from src.modules.tenancy.dependencies import require_app_access

router = APIRouter(prefix="/apps/{app_id}/categories/{category_id}/form", tags=["forms"])


@router.get("", response_model=FormSchemaResponse)
@limiter.limit("120/minute")
async def get_form(
    request: Request,
    app_id: uuid.UUID,
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> FormSchemaResponse:
    svc = FormSchemaService(db)
    form = await svc.get_form(app_id, category_id)
    return FormSchemaResponse.model_validate(form)


@router.put("", response_model=FormSchemaResponse)
@limiter.limit("30/minute")
async def save_form(
    request: Request,
    app_id: uuid.UUID,
    category_id: uuid.UUID,
    data: FormSchemaSave,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> FormSchemaResponse:
    """Create or replace the category's form. Stored submissions are not rewritten."""
    svc = FormSchemaService(db)
    form = await svc.save_form(app_id, category_id, data)
    return FormSchemaResponse.model_validate(form)


@router.delete("", status_code=204)
@limiter.limit("30/minute")
async def delete_form(
    request: Request,
    app_id: uuid.UUID,
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> None:
    svc = FormSchemaService(db)
    await svc.delete_form(app_id, category_id)


@router.post("/presets", response_model=FormSchemaDraft)
@limiter.limit("30/minute")
async def inject_presets(
    request: Request,
    app_id: uuid.UUID,
    category_id: uuid.UUID,
    data: PresetInjectRequest,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> FormSchemaDraft:
    """Preview the form with a preset catalog merged in. Save it with PUT."""
    svc = FormSchemaService(db)
    return await svc.inject_presets(app_id, category_id, data.preset)
