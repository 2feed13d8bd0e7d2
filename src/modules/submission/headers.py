"""Header aggregation: one consistent column set across heterogeneous submissions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel

from src.models.enums import FieldType
from src.modules.forms.constants import MISSING_CELL
from src.modules.submission.resolver import ResolvedField


class Header(BaseModel):
    field_id: str
    label: str
    order: int = 0
    field_type: FieldType = FieldType.TEXT


def aggregate_headers(rows: Iterable[Mapping[str, ResolvedField]]) -> list[Header]:
    """Union of resolved field ids across *rows*.

    The first row that carries a field decides its label and order. Headers
    are sorted by order, then by the sequence in which they were first seen.
    """
    seen: dict[str, tuple[int, Header]] = {}
    for row in rows:
        for field_id, field in row.items():
            if field_id in seen:
                continue
            seen[field_id] = (
                len(seen),
                Header(
                    field_id=field_id,
                    label=field.label,
                    order=field.order,
                    field_type=field.field_type,
                ),
            )
    ranked = sorted(seen.values(), key=lambda item: (item[1].order, item[0]))
    return [header for _, header in ranked]


def display_value(value: Any) -> str:
    if value is None or value == "" or value == []:
        return MISSING_CELL
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def project_row(row: Mapping[str, ResolvedField], headers: list[Header]) -> list[str]:
    cells = []
    for header in headers:
        field = row.get(header.field_id)
        cells.append(display_value(field.resolved) if field is not None else MISSING_CELL)
    return cells


def project_rows(
    rows: Iterable[Mapping[str, ResolvedField]], headers: list[Header]
) -> list[list[str]]:
    return [project_row(row, headers) for row in rows]
