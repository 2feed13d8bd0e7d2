"""CategoryForm model: the registration form schema attached to one category."""

from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class CategoryForm(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "category_forms"

    tenant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("apps.id", ondelete="CASCADE"), nullable=False
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("app_categories.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    form_name: Mapped[str] = mapped_column(String(255), nullable=False)
    fields: Mapped[list] = mapped_column(JSONB, server_default="[]", nullable=False)

    __table_args__ = (
        Index("ix_category_forms_tenant_id", "tenant_id"),
    )
