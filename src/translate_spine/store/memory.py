"""In-memory EntityStore — a thread-safe stand-in for the host record store.

Used by tests, the CLI and local runs. Records are kept per record type in
insertion order; every mutating call is appended to :attr:`operations` so
callers can assert exactly what was written.

Fixture format (``from_dict``)::

    schemas:
      translation_snippet:
        primary_key: translation_snippet_id
        fields: [source_text, language_from, language_to, translated_text]
    records:
      translation_snippet:
        - id: snip-1
          source_text: Hello
          language_from: 1033
          language_to: 1036
"""

from __future__ import annotations

import threading
import uuid
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

from translate_spine.core.errors import RecordNotFoundError, StoreError
from translate_spine.core.logging import get_logger
from translate_spine.core.models import Record, RecordRef, RecordSchema

logger = get_logger(__name__)


@dataclass(frozen=True)
class StoreOperation:
    """One mutating call made against the store."""

    kind: str  # "create" | "update"
    record_type: str
    record_id: str
    fields: dict[str, Any] = field(default_factory=dict)


def _normalise(fields: dict[str, Any]) -> dict[str, Any]:
    return {k.lower(): v for k, v in fields.items()}


class InMemoryEntityStore:
    """Dictionary-backed implementation of :class:`~translate_spine.core.protocols.EntityStore`."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, dict[str, dict[str, Any]]] = {}
        self._schemas: dict[str, RecordSchema] = {}
        self.operations: list[StoreOperation] = []

    # ── Seeding ──────────────────────────────────────────────────────

    def add_schema(self, schema: RecordSchema) -> None:
        with self._lock:
            self._schemas[schema.record_type.lower()] = schema

    def add_record(self, record_type: str, record_id: str | None = None, **fields: Any) -> RecordRef:
        """Seed a record without recording an operation."""
        record_id = record_id or str(uuid.uuid4())
        with self._lock:
            self._records.setdefault(record_type.lower(), {})[record_id] = _normalise(fields)
        return RecordRef(record_type.lower(), record_id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InMemoryEntityStore:
        """Build a store from a fixture mapping (see module docstring)."""
        store = cls()
        for record_type, schema_def in (data.get("schemas") or {}).items():
            store.add_schema(
                RecordSchema(
                    record_type=record_type.lower(),
                    primary_key=schema_def.get("primary_key", f"{record_type.lower()}_id"),
                    fields=frozenset(f.lower() for f in schema_def.get("fields", [])),
                    display_names=dict(schema_def.get("display_names") or {}),
                )
            )
        for record_type, rows in (data.get("records") or {}).items():
            for row in rows or []:
                row = dict(row)
                store.add_record(record_type, str(row.pop("id", "")) or None, **row)
        return store

    # ── EntityStore ──────────────────────────────────────────────────

    def read_field(self, ref: RecordRef, field_name: str) -> Any | None:
        with self._lock:
            row = self._records.get(ref.record_type.lower(), {}).get(ref.id)
            if row is None:
                return None
            return deepcopy(row.get(field_name.lower()))

    def write_fields(self, ref: RecordRef, fields: dict[str, Any]) -> None:
        record_type = ref.record_type.lower()
        values = _normalise(fields)
        with self._lock:
            row = self._records.get(record_type, {}).get(ref.id)
            if row is None:
                raise RecordNotFoundError(record_type, ref.id)
            schema = self._schemas.get(record_type)
            if schema is not None:
                pk_value = values.pop(schema.primary_key, ref.id)
                if str(pk_value) != ref.id:
                    raise StoreError(
                        f"Primary key mismatch for {record_type}: {pk_value!r} != {ref.id!r}"
                    )
                unknown = sorted(k for k in values if schema.fields and k not in schema.fields)
                if unknown:
                    raise StoreError(f"Unknown field(s) for {record_type}: {', '.join(unknown)}")
            row.update(values)
            self.operations.append(StoreOperation("update", record_type, ref.id, dict(values)))
        logger.debug("store.updated", record_type=record_type, record_id=ref.id, fields=sorted(values))

    def read_schema(self, record_type: str) -> RecordSchema:
        with self._lock:
            schema = self._schemas.get(record_type.lower())
        if schema is None:
            return RecordSchema(record_type=record_type.lower(), primary_key=f"{record_type.lower()}_id")
        return schema

    def create_record(self, record_type: str, fields: dict[str, Any]) -> RecordRef:
        record_type = record_type.lower()
        record_id = str(uuid.uuid4())
        values = _normalise(fields)
        with self._lock:
            self._records.setdefault(record_type, {})[record_id] = values
            self.operations.append(StoreOperation("create", record_type, record_id, dict(values)))
        return RecordRef(record_type, record_id)

    def query_records(self, record_type: str, **equals: Any) -> list[Record]:
        criteria = _normalise(equals)
        with self._lock:
            rows = list(self._records.get(record_type.lower(), {}).items())
        return [
            Record(record_type.lower(), record_id, deepcopy(row))
            for record_id, row in rows
            if all(row.get(k) == v for k, v in criteria.items())
        ]

    # ── Inspection ───────────────────────────────────────────────────

    def get_record(self, ref: RecordRef) -> Record | None:
        with self._lock:
            row = self._records.get(ref.record_type.lower(), {}).get(ref.id)
        return Record(ref.record_type.lower(), ref.id, deepcopy(row)) if row is not None else None

    @property
    def updates(self) -> list[StoreOperation]:
        return [op for op in self.operations if op.kind == "update"]
