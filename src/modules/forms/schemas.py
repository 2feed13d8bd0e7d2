"""Pydantic request/response schemas for category registration forms."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import FieldType


class FieldDefinition(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    field_id: str = Field(..., min_length=1, max_length=100)
    label: str = Field("", max_length=255)
    field_type: FieldType = FieldType.TEXT
    placeholder: str | None = Field(None, max_length=255)
    required: bool = False
    enabled: bool = True
    order: int = 0
    options: list[str] = Field(default_factory=list)
    mapping: str | None = None
    min: float | None = None
    max: float | None = None
    step: float | None = None


class FormSchemaSave(BaseModel):
    form_name: str = Field("", max_length=255)
    fields: list[FieldDefinition] = Field(default_factory=list)


class FormSchemaResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    tenant_id: uuid.UUID
    category_id: uuid.UUID
    form_name: str
    fields: list[FieldDefinition]
    created_at: datetime
    updated_at: datetime


class FormSchemaDraft(BaseModel):
    """An unsaved form: the result of merging presets into the current fields."""

    category_id: uuid.UUID
    form_name: str
    fields: list[FieldDefinition]
    added_field_ids: list[str] = []


class PresetInjectRequest(BaseModel):
    preset: str = "commerce"
