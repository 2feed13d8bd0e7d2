"""Registration model: one submitted form document per registrant per app."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from src.models.enums import RegistrationStatus

if TYPE_CHECKING:
    from src.models.registrant import Registrant


class Registration(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "registrations"

    tenant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("apps.id", ondelete="CASCADE"), nullable=False
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("app_categories.id", ondelete="CASCADE"), nullable=False
    )
    registrant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("registrants.id", ondelete="CASCADE"), nullable=False
    )
    # field_id -> raw value exactly as submitted; never rewritten when the form changes
    raw_data: Mapped[dict] = mapped_column(JSONB, server_default="{}", nullable=False)
    status: Mapped[RegistrationStatus] = mapped_column(
        String(20), default=RegistrationStatus.PENDING, server_default="PENDING", nullable=False
    )

    # Relationships
    registrant: Mapped[Registrant] = relationship("Registrant")

    __table_args__ = (
        UniqueConstraint("tenant_id", "registrant_id", name="uq_registrations_tenant_registrant"),
        Index("ix_registrations_category_id", "category_id"),
    )
