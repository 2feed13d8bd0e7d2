"""Field-type catalog: one dispatch entry per ``field_type``.

Every place that needs to know how a field type behaves (save-time schema
checks, submission value validation, numeric coercion) reads it from
``FIELD_TYPES`` instead of switching on the type name.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
import math
from decimal import Decimal, InvalidOperation
from typing import Any

from src.models.enums import FieldType
from src.modules.forms.schemas import FieldDefinition

_STRING = {"type": "string"}
_STRING_LIST = {"type": "array", "items": {"type": "string"}}


@dataclass(frozen=True)
class FieldTypeSpec:
    label: str
    json_schema: dict = field(default_factory=lambda: dict(_STRING))
    numeric: bool = False
    uses_options: bool = False
    multi_value: bool = False


FIELD_TYPES: dict[FieldType, FieldTypeSpec] = {
    FieldType.TEXT: FieldTypeSpec("Text Input"),
    FieldType.NUMBER: FieldTypeSpec("Number Input", {"type": "number"}, numeric=True),
    FieldType.PRICE: FieldTypeSpec("Price", {"type": "number"}, numeric=True),
    FieldType.SKU: FieldTypeSpec("SKU"),
    FieldType.STOCK: FieldTypeSpec("Stock Quantity", {"type": "integer"}, numeric=True),
    FieldType.EMAIL: FieldTypeSpec("Email Input", {"type": "string", "format": "email"}),
    FieldType.TEL: FieldTypeSpec(
        "Phone Input", {"type": "string", "pattern": r"^\+?[0-9 ()\-]{4,20}$"}
    ),
    FieldType.TEXTAREA: FieldTypeSpec("Text Area"),
    FieldType.RADIO: FieldTypeSpec("Radio Buttons", uses_options=True),
    FieldType.CHECKBOX: FieldTypeSpec(
        "Checkboxes", dict(_STRING_LIST), uses_options=True, multi_value=True
    ),
    FieldType.DROPDOWN: FieldTypeSpec("Dropdown", uses_options=True),
    FieldType.DATE: FieldTypeSpec("Date Picker", {"type": "string", "format": "date"}),
    FieldType.FILE: FieldTypeSpec("File Upload"),
    FieldType.IMAGE: FieldTypeSpec(
        "Image Upload (Multiple)", {"anyOf": [_STRING, _STRING_LIST]}, multi_value=True
    ),
    FieldType.VARIANT: FieldTypeSpec(
        "Product Variant", {"anyOf": [_STRING, _STRING_LIST]}, uses_options=True, multi_value=True
    ),
}


def spec_for(field_type: FieldType | str) -> FieldTypeSpec:
    return FIELD_TYPES[FieldType(field_type)]


def field_sort_key(definition: FieldDefinition) -> tuple[int, str]:
    return (definition.order, definition.field_id)


def ordered_fields(fields: Iterable[FieldDefinition]) -> list[FieldDefinition]:
    """Fields in display order: ``order`` ascending, ties broken by ``field_id``."""
    return sorted(fields, key=field_sort_key)


def coerce_numeric(value: Any) -> Any:
    """Numeric strings typed into a form become numbers; anything else is returned as-is."""
    if isinstance(value, str) and value.strip():
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return value
        if not number.is_finite() or not math.isfinite(float(number)):
            return value
        if number == number.to_integral_value():
            return int(number)
        return float(number)
    return value


def field_json_schema(definition: FieldDefinition) -> dict:
    """JSON Schema (Draft 7) fragment for one field's submitted value."""
    spec = spec_for(definition.field_type)

    if definition.mapping:
        # Foreign key into a lookup table, as typed by the submitter
        key = {"type": ["integer", "string"]}
        if spec.multi_value:
            return {"anyOf": [key, {"type": "array", "items": key}]}
        return key

    fragment = dict(spec.json_schema)
    if spec.numeric:
        if definition.min is not None:
            fragment["minimum"] = definition.min
        if definition.max is not None:
            fragment["maximum"] = definition.max

    if spec.uses_options and definition.options:
        if spec.multi_value:
            fragment = {
                "anyOf": [
                    {"type": "string", "enum": list(definition.options)},
                    {"type": "array", "items": {"type": "string", "enum": list(definition.options)}},
                ]
            }
        else:
            fragment["enum"] = list(definition.options)

    if definition.required and fragment.get("type") == "string":
        fragment["minLength"] = 1

    return fragment


def build_json_schema(
    fields: Iterable[FieldDefinition],
    *,
    only: set[str] | None = None,
    enforce_required: bool = True,
) -> dict:
    """JSON Schema for a submission document.

    New submissions are checked against the enabled fields only. Passing
    *only* restricts the schema to those field ids (used for partial edits,
    where disabled historical fields are still editable).
    """
    properties: dict[str, dict] = {}
    required: list[str] = []
    for definition in ordered_fields(fields):
        if only is not None:
            if definition.field_id not in only:
                continue
        elif not definition.enabled:
            continue
        properties[definition.field_id] = field_json_schema(definition)
        if enforce_required and definition.required:
            required.append(definition.field_id)

    schema: dict = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema
