"""Tests for header aggregation across heterogeneous submissions."""

from __future__ import annotations

from src.models.enums import FieldType
from src.modules.forms.schemas import FieldDefinition
from src.modules.submission.headers import aggregate_headers, display_value, project_rows
from src.modules.submission.lookup import MappingLookupProvider
from src.modules.submission.resolver import resolve

LOOKUPS = MappingLookupProvider({"state": {3: "Kerala"}})

SELLER_FORM = [
    FieldDefinition(field_id="shop", label="Shop", order=1),
    FieldDefinition(field_id="state", label="State", mapping="state", field_type=FieldType.DROPDOWN, order=2),
]
TUTOR_FORM = [
    FieldDefinition(field_id="subject", label="Subject", order=1),
    FieldDefinition(field_id="state", label="Home State", order=3),
    FieldDefinition(field_id="rate", label="Hourly Rate", field_type=FieldType.PRICE, order=2),
]


def _rows():
    return [
        resolve({"shop": "Corner Store", "state": 3}, SELLER_FORM, LOOKUPS),
        resolve({"subject": "Maths", "rate": 400, "state": "Goa"}, TUTOR_FORM, LOOKUPS),
        resolve({"shop": ""}, SELLER_FORM, LOOKUPS),
    ]


def test_headers_union_sorted_by_order_then_first_seen():
    headers = aggregate_headers(_rows())

    assert [h.field_id for h in headers] == ["shop", "subject", "state", "rate"]


def test_first_occurrence_decides_label():
    headers = {h.field_id: h for h in aggregate_headers(_rows())}

    assert headers["state"].label == "State"
    assert headers["state"].order == 2


def test_missing_and_empty_cells_render_as_dash():
    rows = _rows()
    headers = aggregate_headers(rows)

    table = project_rows(rows, headers)

    assert table == [
        ["Corner Store", "-", "Kerala", "-"],
        ["-", "Maths", "Goa", "400"],
        ["-", "-", "-", "-"],
    ]


def test_no_rows_no_headers():
    assert aggregate_headers([]) == []


def test_display_value_joins_lists():
    assert display_value(["S", "M"]) == "S, M"
    assert display_value([]) == "-"
    assert display_value(None) == "-"
    assert display_value(0) == "0"
