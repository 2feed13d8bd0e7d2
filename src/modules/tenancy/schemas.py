"""Pydantic schemas for apps (tenants) and their locking policy."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import AppStatus
from src.modules.category.schemas import LockingPolicy


class AppCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class AppResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    status: AppStatus
    created_at: datetime
    updated_at: datetime


class LockingPolicyResponse(BaseModel):
    app_id: uuid.UUID
    locking: LockingPolicy
