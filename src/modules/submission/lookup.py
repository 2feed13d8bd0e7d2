"""Reference lookups: display names for the keys stored in mapped fields."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.reference import Country, District, Education, Profession, State
from src.modules.forms.schemas import FieldDefinition

logger = logging.getLogger(__name__)

LOOKUP_MODELS = {
    "country": Country,
    "state": State,
    "district": District,
    "education": Education,
    "profession": Profession,
}


class LookupProvider(Protocol):
    def lookup(self, table: str, key: Any) -> str | None: ...


def normalize_key(key: Any) -> int | None:
    """Reference keys are integer ids; submitters often send them as strings."""
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and key.strip().isdigit():
        return int(key.strip())
    return None


class MappingLookupProvider:
    """In-memory lookup tables: ``{table: {id: name}}``."""

    def __init__(self, tables: dict[str, dict[int, str]] | None = None) -> None:
        self._tables: dict[str, dict[int, str]] = {
            table: dict(entries) for table, entries in (tables or {}).items()
        }

    def add(self, table: str, key: int, name: str) -> None:
        self._tables.setdefault(table, {})[key] = name

    def lookup(self, table: str, key: Any) -> str | None:
        normalized = normalize_key(key)
        if normalized is None:
            return None
        return self._tables.get(table, {}).get(normalized)


def collect_lookup_keys(
    rows: Iterable[tuple[dict, list[FieldDefinition]]],
) -> dict[str, set[int]]:
    """Gather every mapped key referenced by *rows* of ``(raw_data, fields)``, per table."""
    keys: dict[str, set[int]] = {}
    for raw_data, fields in rows:
        for definition in fields:
            if not definition.mapping or definition.field_id not in raw_data:
                continue
            value = raw_data[definition.field_id]
            values = value if isinstance(value, list) else [value]
            for item in values:
                normalized = normalize_key(item)
                if normalized is not None:
                    keys.setdefault(definition.mapping, set()).add(normalized)
    return keys


class ReferenceLookupService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def prefetch(self, keys: dict[str, set[int]]) -> MappingLookupProvider:
        """Load the names for *keys* with one query per referenced table."""
        provider = MappingLookupProvider()
        for table, ids in keys.items():
            model = LOOKUP_MODELS.get(table)
            if model is None or not ids:
                continue
            stmt = select(model.id, model.name).where(model.id.in_(sorted(ids)))
            result = await self._session.execute(stmt)
            rows = result.all()
            for row_id, name in rows:
                provider.add(table, row_id, name)
            logger.debug("Prefetched %d of %d %s names", len(rows), len(ids), table)
        return provider
