"""Category module API router: per-app category tree."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.app import limiter
from src.database.session import get_db
from src.modules.category.schemas import (
    CascadeDeleteResult,
    CategoryCreate,
    CategoryResponse,
    CategoryTreeNode,
    CategoryUpdate,
)
from src.modules.category.service import CategoryService
from src.modules.tenancy.auth import AuthenticatedUser
from src.modules.tenancy.dependencies import require_app_access

category_router = APIRouter(prefix="/apps/{app_id}/categories", tags=["categories"])


@category_router.post("", response_model=CategoryResponse, status_code=201)
@limiter.limit("30/minute")
async def create_category(
    request: Request,
    app_id: uuid.UUID,
    data: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> CategoryResponse:
    svc = CategoryService(db)
    category = await svc.create_category(app_id, data)
    return CategoryResponse.model_validate(category)


@category_router.get("", response_model=list[CategoryResponse])
@limiter.limit("120/minute")
async def list_categories(
    request: Request,
    app_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> list[CategoryResponse]:
    svc = CategoryService(db)
    categories = await svc.list_categories(app_id)
    return [CategoryResponse.model_validate(c) for c in categories]


# Static route BEFORE /{category_id} to avoid shadowing
@category_router.get("/tree", response_model=list[CategoryTreeNode])
@limiter.limit("120/minute")
async def get_category_tree(
    request: Request,
    app_id: uuid.UUID,
    root_id: uuid.UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> list[CategoryTreeNode]:
    svc = CategoryService(db)
    return await svc.get_tree(app_id, root_id=root_id)


@category_router.get("/{category_id}", response_model=CategoryResponse)
@limiter.limit("120/minute")
async def get_category(
    request: Request,
    app_id: uuid.UUID,
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> CategoryResponse:
    svc = CategoryService(db)
    category = await svc.get_category(app_id, category_id)
    return CategoryResponse.model_validate(category)


@category_router.patch("/{category_id}", response_model=CategoryResponse)
@limiter.limit("30/minute")
async def update_category(
    request: Request,
    app_id: uuid.UUID,
    category_id: uuid.UUID,
    data: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> CategoryResponse:
    svc = CategoryService(db)
    category = await svc.update_category(app_id, category_id, data)
    return CategoryResponse.model_validate(category)


@category_router.delete("/{category_id}", response_model=CascadeDeleteResult)
@limiter.limit("30/minute")
async def delete_category(
    request: Request,
    app_id: uuid.UUID,
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user: AuthenticatedUser = Depends(require_app_access),
) -> CascadeDeleteResult:
    """Delete a category with its subtree, forms, and submissions."""
    svc = CategoryService(db)
    return await svc.delete_category(app_id, category_id)
