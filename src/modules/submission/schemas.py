"""Pydantic request/response schemas for the submission module."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.models.enums import RegistrationStatus
from src.modules.submission.headers import Header
from src.modules.submission.resolver import ResolvedField


# ---------------------------------------------------------------------------
# Registrants
# ---------------------------------------------------------------------------

class RegistrantCreate(BaseModel):
    email: str | None = Field(None, max_length=255)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=30)


class ContactPatch(BaseModel):
    email: str | None = Field(None, max_length=255)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=30)


class RegistrantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str | None
    first_name: str | None
    last_name: str | None
    phone: str | None
    active: bool


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------

class SubmissionCreate(BaseModel):
    category_id: uuid.UUID
    registrant_id: uuid.UUID | None = None
    registrant: RegistrantCreate | None = None
    raw_data: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def require_registrant(self) -> SubmissionCreate:
        if (self.registrant_id is None) == (self.registrant is None):
            raise ValueError("Provide exactly one of registrant_id or registrant")
        return self


class SubmissionPatch(BaseModel):
    raw_data: dict[str, Any] | None = None
    contact: ContactPatch | None = None


class StatusUpdate(BaseModel):
    status: RegistrationStatus


class SubmissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    tenant_id: uuid.UUID
    category_id: uuid.UUID
    registrant_id: uuid.UUID
    raw_data: dict[str, Any]
    status: RegistrationStatus
    registrant: RegistrantResponse | None = None
    created_at: datetime
    updated_at: datetime


class ResolvedSubmission(BaseModel):
    submission_id: uuid.UUID
    category_id: uuid.UUID
    registrant_id: uuid.UUID
    status: RegistrationStatus
    fields: dict[str, ResolvedField]
    cells: list[str] = []


class SubmissionTable(BaseModel):
    headers: list[Header]
    rows: list[ResolvedSubmission]
    total: int
