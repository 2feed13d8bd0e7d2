"""Form service: one registration form schema per category."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.exceptions import NotFoundException, ValidationException
from src.models.category_form import CategoryForm
from src.modules.category.service import CategoryService
from src.modules.forms.field_types import ordered_fields
from src.modules.forms.governance import FormGovernanceService
from src.modules.forms.presets import PRESETS, inject_presets
from src.modules.forms.schemas import FieldDefinition, FormSchemaDraft, FormSchemaSave

logger = logging.getLogger(__name__)


def load_fields(form: CategoryForm | None) -> list[FieldDefinition]:
    """Typed, display-ordered fields of a stored form (empty without a form)."""
    if form is None:
        return []
    return ordered_fields(FieldDefinition.model_validate(f) for f in form.fields or [])


class FormSchemaService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._governance = FormGovernanceService()

    async def find_form(self, tenant_id: uuid.UUID, category_id: uuid.UUID) -> CategoryForm | None:
        stmt = select(CategoryForm).where(
            CategoryForm.tenant_id == tenant_id,
            CategoryForm.category_id == category_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_form(self, tenant_id: uuid.UUID, category_id: uuid.UUID) -> CategoryForm:
        await CategoryService(self._session).get_category(tenant_id, category_id)
        form = await self.find_form(tenant_id, category_id)
        if form is None:
            raise NotFoundException(f"Category {category_id} has no form")
        return form

    async def save_form(
        self, tenant_id: uuid.UUID, category_id: uuid.UUID, data: FormSchemaSave
    ) -> CategoryForm:
        """Create or replace the form attached to a category.

        Fields are stored in display order. Existing submissions are left
        exactly as they are; dropped or retyped fields are logged.
        """
        await CategoryService(self._session).get_category(tenant_id, category_id)
        self._governance.validate_form(data.form_name, data.fields)

        fields = ordered_fields(data.fields)
        stored = [f.model_dump(mode="json") for f in fields]

        form = await self.find_form(tenant_id, category_id)
        if form is None:
            form = CategoryForm(
                tenant_id=tenant_id,
                category_id=category_id,
                form_name=data.form_name.strip(),
                fields=stored,
            )
            self._session.add(form)
        else:
            changes = self._governance.detect_field_changes(load_fields(form), fields)
            if changes:
                logger.warning(
                    "Form for category %s changed incompatibly with stored submissions: %s",
                    category_id,
                    changes,
                )
            form.form_name = data.form_name.strip()
            form.fields = stored

        await self._session.flush()
        logger.info(
            "Saved form '%s' for category %s in app %s (%d fields)",
            form.form_name,
            category_id,
            tenant_id,
            len(stored),
        )
        return form

    async def delete_form(self, tenant_id: uuid.UUID, category_id: uuid.UUID) -> None:
        form = await self.get_form(tenant_id, category_id)
        await self._session.delete(form)
        await self._session.flush()
        logger.info("Deleted form for category %s in app %s", category_id, tenant_id)

    async def inject_presets(
        self, tenant_id: uuid.UUID, category_id: uuid.UUID, preset: str = "commerce"
    ) -> FormSchemaDraft:
        """Merge a preset catalog into the category's current fields.

        Nothing is persisted; the caller reviews the draft and saves it.
        """
        catalog = PRESETS.get(preset)
        if catalog is None:
            raise ValidationException(
                f"Unknown preset '{preset}'",
                details=[{"field": "preset", "message": f"Expected one of {sorted(PRESETS)}"}],
            )

        await CategoryService(self._session).get_category(tenant_id, category_id)
        form = await self.find_form(tenant_id, category_id)
        merged, added = inject_presets(load_fields(form), catalog)
        return FormSchemaDraft(
            category_id=category_id,
            form_name=form.form_name if form is not None else "",
            fields=ordered_fields(merged),
            added_field_ids=added,
        )
