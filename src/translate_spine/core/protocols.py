"""
Canonical protocol definitions for translate-spine.

The host record store is an external collaborator; everything in this
package talks to it through :class:`EntityStore`. Any object with the same
shape works (the bundled :class:`~translate_spine.store.memory.InMemoryEntityStore`,
a client for the real host, a test double).

Architecture:
    ::

        protocols.py
        ├── EntityStore   — record read/write + schema catalogue
        └── SignalHandler — callable registered with the dispatcher

    Consumers:
        providers/registry.py, consensus/audit.py, translation/handler.py,
        translation/locales.py, framework/context.py

Guardrails:
    ❌ DON'T: Reach into a concrete store from domain code
    ✅ DO: Accept an EntityStore and let bootstrap wire the implementation

Tags:
    translate-spine, protocols, entity-store, ports

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from translate_spine.core.models import Record, RecordRef, RecordSchema

if TYPE_CHECKING:
    from translate_spine.framework.context import HandlerContext


@runtime_checkable
class EntityStore(Protocol):
    """
    Host record store port.

    Every call is an independent request/response; no transaction spans
    two calls.
    """

    def read_field(self, ref: RecordRef, field_name: str) -> Any | None:
        """Return a field value, or None when the field or record is absent."""
        ...

    def write_fields(self, ref: RecordRef, fields: dict[str, Any]) -> None:
        """Update the given fields only. Raises StoreError on failure."""
        ...

    def read_schema(self, record_type: str) -> RecordSchema:
        """Return schema metadata for a record type."""
        ...

    def create_record(self, record_type: str, fields: dict[str, Any]) -> RecordRef:
        """Append a new record and return its reference."""
        ...

    def query_records(self, record_type: str, **equals: Any) -> list[Record]:
        """Return records whose fields equal every given value, in insertion order."""
        ...


class SignalHandler(Protocol):
    """Handler invoked by the dispatcher for a matching signal."""

    def __call__(self, context: HandlerContext) -> None: ...


__all__ = ["EntityStore", "SignalHandler"]
