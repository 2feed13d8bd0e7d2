"""Centralized v1 API router: all module routers are included here."""

from fastapi import APIRouter

from src.modules.category.router import category_router
from src.modules.forms.router import router as forms_router
from src.modules.submission.router import router as submission_router
from src.modules.tenancy.router import router as tenancy_router

v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(tenancy_router)
v1_router.include_router(category_router)
v1_router.include_router(forms_router)
v1_router.include_router(submission_router)
