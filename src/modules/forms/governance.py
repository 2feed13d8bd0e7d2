"""Form governance: save-time rules and change detection for category forms."""

from __future__ import annotations

import json

from src.config import settings
from src.exceptions import ValidationException
from src.modules.forms.constants import LOOKUP_TABLES
from src.modules.forms.field_types import spec_for
from src.modules.forms.schemas import FieldDefinition


class FormGovernanceService:

    def validate_form(self, form_name: str, fields: list[FieldDefinition]) -> None:
        """Validate a form definition before it is persisted.

        Checks:
        - ``form_name`` is not blank
        - at least one field
        - every ``field_id`` is unique
        - option-driven types carry options, unless they carry a ``mapping``
        - a ``mapping`` names a known lookup table and excludes static options
        - ``min <= max`` when both are set
        - serialized size stays under the configured limit

        Raises ValidationException listing every violation.
        """
        details: list[dict] = []

        if not form_name or not form_name.strip():
            details.append({"field": "form_name", "message": "Form name is required"})
        if not fields:
            details.append({"field": "fields", "message": "At least one field is required"})

        seen: set[str] = set()
        for index, definition in enumerate(fields):
            path = f"fields.{index}"
            if definition.field_id in seen:
                details.append({
                    "field": f"{path}.field_id",
                    "message": f"Duplicate field_id '{definition.field_id}'",
                })
            seen.add(definition.field_id)
            details.extend(self._check_field(path, definition))

        if details:
            raise ValidationException("Form definition is invalid", details=details)

        serialized = json.dumps(
            {"form_name": form_name, "fields": [f.model_dump(mode="json") for f in fields]}
        )
        if len(serialized.encode("utf-8")) > settings.max_form_schema_bytes:
            raise ValidationException(
                f"Form exceeds maximum size of {settings.max_form_schema_bytes // 1024} KB"
            )

    def detect_field_changes(
        self, old_fields: list[FieldDefinition] | None, new_fields: list[FieldDefinition]
    ) -> list[dict]:
        """Compare two field lists and report fields removed or retyped.

        Existing submissions are never migrated, so these changes only affect
        how historical rows are resolved. Returns dicts with "field" and
        "reason" keys.
        """
        if not old_fields:
            return []

        new_by_id = {f.field_id: f for f in new_fields}
        changes: list[dict] = []
        for old in old_fields:
            new = new_by_id.get(old.field_id)
            if new is None:
                changes.append({"field": old.field_id, "reason": "Field removed"})
                continue
            if old.field_type != new.field_type:
                changes.append({
                    "field": old.field_id,
                    "reason": f"Type changed from '{old.field_type.value}' to '{new.field_type.value}'",
                })
            if old.mapping != new.mapping:
                changes.append({
                    "field": old.field_id,
                    "reason": f"Mapping changed from '{old.mapping}' to '{new.mapping}'",
                })
        return changes

    def _check_field(self, path: str, definition: FieldDefinition) -> list[dict]:
        details: list[dict] = []
        spec = spec_for(definition.field_type)

        if definition.mapping is not None:
            if definition.mapping not in LOOKUP_TABLES:
                details.append({
                    "field": f"{path}.mapping",
                    "message": f"Unknown lookup table '{definition.mapping}'",
                })
            if definition.options:
                details.append({
                    "field": f"{path}.options",
                    "message": "A mapped field cannot also declare static options",
                })
        elif spec.uses_options and not definition.options:
            details.append({
                "field": f"{path}.options",
                "message": f"Field type '{definition.field_type.value}' requires options",
            })

        if (
            definition.min is not None
            and definition.max is not None
            and definition.min > definition.max
        ):
            details.append({"field": f"{path}.min", "message": "min must not exceed max"})

        return details
