"""TenantApp model: the tenant ("app") that owns a category tree."""

from __future__ import annotations

from sqlalchemy import Index, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from src.models.enums import AppStatus


class TenantApp(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "apps"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[AppStatus] = mapped_column(String(20), server_default="ACTIVE", nullable=False)
    # Sparse locking document: lockCategory / lockSubCategory / lockChildCategory / customFormConfig
    locking_json: Mapped[dict | None] = mapped_column(JSONB)

    __table_args__ = (
        Index("ix_apps_status", "status"),
    )
