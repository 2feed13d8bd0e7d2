"""Pydantic request/response schemas for the category module."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.enums import CategoryStatus


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    parent_id: uuid.UUID | None = None
    kind: str | None = Field(None, max_length=50)
    image_ref: str | None = Field(None, max_length=1024)
    sort_order: int = 0
    status: CategoryStatus = CategoryStatus.ACTIVE
    registration_limit: int | None = Field(None, ge=1)


class CategoryUpdate(BaseModel):
    """Mutable category attributes. ``parent_id`` is write-once and cannot be changed here."""

    name: str | None = Field(None, min_length=1, max_length=100)
    kind: str | None = Field(None, max_length=50)
    image_ref: str | None = Field(None, max_length=1024)
    sort_order: int | None = None
    status: CategoryStatus | None = None
    registration_limit: int | None = Field(None, ge=1)

    @field_validator("name", "sort_order", "status")
    @classmethod
    def reject_null(cls, v):
        # Omit the key to leave it unchanged; these columns are NOT NULL
        if v is None:
            raise ValueError("may not be null")
        return v


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    tenant_id: uuid.UUID
    parent_id: uuid.UUID | None
    name: str
    kind: str | None
    image_ref: str | None
    sort_order: int
    status: CategoryStatus
    registration_limit: int | None
    created_at: datetime
    updated_at: datetime


class CategoryTreeNode(BaseModel):
    id: uuid.UUID
    tenant_id: uuid.UUID | None = None
    parent_id: uuid.UUID | None = None
    name: str
    kind: str | None = None
    image_ref: str | None = None
    sort_order: int = 0
    status: CategoryStatus = CategoryStatus.ACTIVE
    depth: int = 0
    children: list[CategoryTreeNode] = Field(default_factory=list)

    # Per-render affordances, filled in by the locking resolver
    is_leaf: bool = True
    children_locked: bool = False
    can_add_child: bool = False
    can_attach_form: bool = False
    has_form: bool = False


class CascadeDeleteResult(BaseModel):
    category_id: uuid.UUID
    deleted_categories: int
    deleted_forms: int
    deleted_submissions: int


# ---------------------------------------------------------------------------
# Locking policy
# ---------------------------------------------------------------------------

class LockingPolicy(BaseModel):
    """Per-app locking document. Field aliases match the stored camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    lock_category: bool = Field(False, alias="lockCategory")
    lock_sub_category: bool = Field(False, alias="lockSubCategory")
    lock_child_category: bool = Field(False, alias="lockChildCategory")
    custom_form_config: dict = Field(default_factory=dict, alias="customFormConfig")


CategoryTreeNode.model_rebuild()
