"""Record shapes shared by the store port, the dispatcher and the handler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RecordRef:
    """Reference to one record: its type and identifier."""

    record_type: str
    id: str
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result = {"record_type": self.record_type, "id": self.id}
        if self.name is not None:
            result["name"] = self.name
        return result


@dataclass
class Record:
    """A record snapshot: reference plus field values."""

    record_type: str
    id: str
    fields: dict[str, Any] = field(default_factory=dict)

    def to_ref(self) -> RecordRef:
        return RecordRef(self.record_type, self.id)

    def get(self, field_name: str, default: Any = None) -> Any:
        """Case-insensitive field read; field names are lower-cased on the host."""
        return self.fields.get(field_name.lower(), default)


@dataclass(frozen=True)
class RecordSchema:
    """
    Schema metadata for one record type.

    Attributes:
        record_type: Logical name of the record type
        primary_key: Field holding the record identifier
        fields: Known field names
        display_names: Lookup/display label per field
    """

    record_type: str
    primary_key: str
    fields: frozenset[str] = frozenset()
    display_names: dict[str, str] = field(default_factory=dict)

    def display_name(self, field_name: str) -> str:
        """Return the display label of a field, falling back to its name."""
        return self.display_names.get(field_name, field_name)


__all__ = ["RecordRef", "Record", "RecordSchema"]
