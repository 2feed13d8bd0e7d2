"""Initial schema: apps, category tree, forms, submissions, lookup tables

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import JSONB, UUID

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_pk() -> sa.Column:
    return sa.Column("id", UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    # gen_random_uuid() backs every UUID primary key
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto";')

    # 1. lookup tables
    op.create_table(
        "countries",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
    )
    op.create_table(
        "states",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("country_id", sa.Integer, sa.ForeignKey("countries.id"), nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
    )
    op.create_table(
        "districts",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("state_id", sa.Integer, sa.ForeignKey("states.id"), nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
    )
    op.create_table(
        "educations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
    )
    op.create_table(
        "professions",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
    )

    # 2. apps
    op.create_table(
        "apps",
        _uuid_pk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), server_default="ACTIVE", nullable=False),
        sa.Column("locking_json", JSONB, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_apps_status", "apps", ["status"])

    # 3. app_categories (self-referencing tree)
    op.create_table(
        "app_categories",
        _uuid_pk(),
        sa.Column("tenant_id", UUID(as_uuid=True), sa.ForeignKey("apps.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "parent_id",
            UUID(as_uuid=True),
            sa.ForeignKey("app_categories.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("kind", sa.String(50), nullable=True),
        sa.Column("image_ref", sa.String(1024), nullable=True),
        sa.Column("sort_order", sa.Integer, server_default="0", nullable=False),
        sa.Column("status", sa.String(20), server_default="ACTIVE", nullable=False),
        sa.Column("registration_limit", sa.Integer, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_app_categories_tenant_id", "app_categories", ["tenant_id"])
    op.create_index("ix_app_categories_parent_id", "app_categories", ["parent_id"])

    # 4. category_forms (zero or one per category)
    op.create_table(
        "category_forms",
        _uuid_pk(),
        sa.Column("tenant_id", UUID(as_uuid=True), sa.ForeignKey("apps.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "category_id",
            UUID(as_uuid=True),
            sa.ForeignKey("app_categories.id", ondelete="CASCADE"),
            unique=True,
            nullable=False,
        ),
        sa.Column("form_name", sa.String(255), nullable=False),
        sa.Column("fields", JSONB, server_default="[]", nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_category_forms_tenant_id", "category_forms", ["tenant_id"])

    # 5. registrants
    op.create_table(
        "registrants",
        _uuid_pk(),
        sa.Column("tenant_id", UUID(as_uuid=True), sa.ForeignKey("apps.id", ondelete="CASCADE"), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("active", sa.Boolean, server_default="false", nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_registrants_tenant_id", "registrants", ["tenant_id"])

    # 6. registrations (submissions)
    op.create_table(
        "registrations",
        _uuid_pk(),
        sa.Column("tenant_id", UUID(as_uuid=True), sa.ForeignKey("apps.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "category_id",
            UUID(as_uuid=True),
            sa.ForeignKey("app_categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "registrant_id",
            UUID(as_uuid=True),
            sa.ForeignKey("registrants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("raw_data", JSONB, server_default="{}", nullable=False),
        sa.Column("status", sa.String(20), server_default="PENDING", nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("tenant_id", "registrant_id", name="uq_registrations_tenant_registrant"),
    )
    op.create_index("ix_registrations_category_id", "registrations", ["category_id"])


def downgrade() -> None:
    op.drop_table("registrations")
    op.drop_table("registrants")
    op.drop_table("category_forms")
    op.drop_table("app_categories")
    op.drop_table("apps")
    op.drop_table("professions")
    op.drop_table("educations")
    op.drop_table("districts")
    op.drop_table("states")
    op.drop_table("countries")
    op.execute('DROP EXTENSION IF EXISTS "pgcrypto";')
