"""Submission validators: check submitted values against a category form."""

from __future__ import annotations

from jsonschema import Draft7Validator, FormatChecker

from src.exceptions import ValidationException
from src.modules.forms.field_types import build_json_schema, coerce_numeric, spec_for
from src.modules.forms.schemas import FieldDefinition


def normalize_values(raw_data: dict, fields: list[FieldDefinition]) -> dict:
    """Copy of *raw_data* with numeric strings coerced for numeric fields."""
    numeric_ids = {
        f.field_id for f in fields if spec_for(f.field_type).numeric and not f.mapping
    }
    return {
        key: coerce_numeric(value) if key in numeric_ids else value
        for key, value in raw_data.items()
    }


def _is_blank(value) -> bool:
    return value is None or value == "" or value == []


def drop_blank_optionals(raw_data: dict, fields: list[FieldDefinition]) -> dict:
    """Copy of *raw_data* without empty values for fields that are not required.

    Forms send ``""`` for inputs left empty or cleared; those are absent
    answers, not values to check against the field type.
    """
    optional_ids = {f.field_id for f in fields if not f.required}
    return {
        key: value
        for key, value in raw_data.items()
        if not (key in optional_ids and _is_blank(value))
    }


def validate_submission_values(
    raw_data: dict,
    fields: list[FieldDefinition],
    *,
    partial: bool = False,
) -> None:
    """Validate *raw_data* against *fields* using JSON Schema Draft 7.

    A full submission is checked against the enabled fields, required ones
    included. A partial edit checks only the keys it carries, against any
    field of the form, enabled or not. Keys the form does not declare are
    accepted as-is, as are empty values of optional fields.

    Raises :class:`ValidationException` with per-field detail on failure.
    """
    if partial:
        schema = build_json_schema(fields, only=set(raw_data), enforce_required=False)
    else:
        schema = build_json_schema(fields)

    validator = Draft7Validator(schema, format_checker=FormatChecker())
    document = normalize_values(drop_blank_optionals(raw_data, fields), fields)
    errors = sorted(validator.iter_errors(document), key=lambda e: list(e.absolute_path))

    if not errors:
        return

    details = []
    for error in errors:
        field_path = ".".join(str(p) for p in error.absolute_path) or "(root)"
        details.append({"field": field_path, "message": error.message})

    raise ValidationException(
        message="Submitted values do not match the category form",
        details=details,
    )
