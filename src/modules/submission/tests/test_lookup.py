"""Tests for reference lookups."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.models.enums import FieldType
from src.modules.forms.schemas import FieldDefinition
from src.modules.submission.lookup import (
    MappingLookupProvider,
    ReferenceLookupService,
    collect_lookup_keys,
    normalize_key,
)


@pytest.mark.parametrize(
    ("key", "expected"),
    [(5, 5), ("5", 5), (" 12 ", 12), ("abc", None), (None, None), (True, None), (2.5, None)],
)
def test_normalize_key(key, expected):
    assert normalize_key(key) == expected


def test_mapping_provider_lookup():
    provider = MappingLookupProvider({"country": {1: "India"}})
    provider.add("state", 9, "Kerala")

    assert provider.lookup("country", "1") == "India"
    assert provider.lookup("state", 9) == "Kerala"
    assert provider.lookup("country", 2) is None
    assert provider.lookup("district", 1) is None


def test_collect_lookup_keys():
    fields = [
        FieldDefinition(field_id="country", field_type=FieldType.DROPDOWN, mapping="country"),
        FieldDefinition(field_id="langs", field_type=FieldType.CHECKBOX, mapping="profession"),
        FieldDefinition(field_id="name"),
    ]
    rows = [
        ({"country": "1", "langs": [2, "3"], "name": "7"}, fields),
        ({"country": 4}, fields),
        ({"country": "not-an-id"}, fields),
        ({"country": 5}, []),
    ]

    assert collect_lookup_keys(rows) == {"country": {1, 4}, "profession": {2, 3}}


@pytest.mark.asyncio
async def test_prefetch_runs_one_query_per_table():
    session = AsyncMock()
    country_rows = MagicMock()
    country_rows.all.return_value = [(1, "India")]
    state_rows = MagicMock()
    state_rows.all.return_value = [(3, "Kerala"), (4, "Goa")]
    session.execute.side_effect = [country_rows, state_rows]

    provider = await ReferenceLookupService(session).prefetch(
        {"country": {1, 99}, "state": {3, 4}, "unknown": {1}}
    )

    assert session.execute.await_count == 2
    assert provider.lookup("country", 1) == "India"
    assert provider.lookup("country", 99) is None
    assert provider.lookup("state", "4") == "Goa"
