"""Submission resolver: turns a raw submission into an ordered, labelled field list.

Resolution is a pure function of ``(raw_data, fields, lookups)``: it reads the
raw document, never writes to it, and never touches the database. Lookups
come in through a :class:`LookupProvider` prefetched by the caller.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field

from src.models.enums import FieldType
from src.modules.forms.field_types import ordered_fields
from src.modules.forms.schemas import FieldDefinition
from src.modules.submission.lookup import LookupProvider

logger = logging.getLogger(__name__)


class ResolvedField(BaseModel):
    field_id: str
    raw: Any = None
    resolved: Any = None
    label: str
    field_type: FieldType = FieldType.TEXT
    mapping: str | None = None
    options: list[str] = Field(default_factory=list)
    order: int = 0


def field_label(definition: FieldDefinition) -> str:
    return definition.label or definition.placeholder or definition.field_id


def _resolve_value(value: Any, mapping: str, lookups: LookupProvider) -> Any:
    if isinstance(value, list):
        return [_resolve_value(item, mapping, lookups) for item in value]
    name = lookups.lookup(mapping, value)
    if name is None:
        logger.debug("No %s entry for key %r, showing raw value", mapping, value)
        return value
    return name


def resolve(
    raw_data: dict,
    fields: list[FieldDefinition] | None,
    lookups: LookupProvider,
) -> dict[str, ResolvedField]:
    """Resolve *raw_data* against the form it was submitted under.

    Fields are visited in display order and only those present in the raw
    document are emitted, disabled ones included. A mapped value becomes the
    lookup table's display name, or stays raw when the key is unknown.

    Without a form every raw key is emitted verbatim as a text field.
    """
    if not fields:
        return {
            key: ResolvedField(field_id=key, raw=value, resolved=value, label=key)
            for key, value in raw_data.items()
        }

    resolved: dict[str, ResolvedField] = {}
    for definition in ordered_fields(fields):
        if definition.field_id not in raw_data:
            continue
        raw = raw_data[definition.field_id]
        value = _resolve_value(raw, definition.mapping, lookups) if definition.mapping else raw
        resolved[definition.field_id] = ResolvedField(
            field_id=definition.field_id,
            raw=raw,
            resolved=value,
            label=field_label(definition),
            field_type=definition.field_type,
            mapping=definition.mapping,
            options=list(definition.options),
            order=definition.order,
        )
    return resolved
