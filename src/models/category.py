from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from src.models.enums import CategoryStatus


class AppCategory(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "app_categories"

    tenant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("apps.id", ondelete="CASCADE"), nullable=False
    )
    # Write-once: set at creation and never updated, which keeps the tree acyclic
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("app_categories.id", ondelete="CASCADE")
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    kind: Mapped[str | None] = mapped_column(String(50))
    image_ref: Mapped[str | None] = mapped_column(String(1024))
    sort_order: Mapped[int] = mapped_column(Integer, server_default="0", nullable=False)
    status: Mapped[CategoryStatus] = mapped_column(String(20), server_default="ACTIVE", nullable=False)
    registration_limit: Mapped[int | None] = mapped_column(Integer)

    __table_args__ = (
        Index("ix_app_categories_tenant_id", "tenant_id"),
        Index("ix_app_categories_parent_id", "parent_id"),
    )
