"""Registration table — which handler runs for which signal.

Manifesto:
    The table is built once at process start and only read afterwards, so
    concurrent dispatches share it without locking. Lookup is an ordered
    linear scan: the first registration that matches wins, there are no
    hidden priority rules. Overlapping registrations are the registrant's
    problem; the dispatcher never runs two handlers for one signal.

Tags:
    translate-spine, framework, registry, handler-lookup

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from translate_spine.core.logging import get_logger
from translate_spine.core.protocols import SignalHandler
from translate_spine.framework.signals import ExecutionSignal, Stage

logger = get_logger(__name__)


@dataclass(frozen=True)
class Registration:
    """``(stage, operation, record type filter) -> handler``. Empty filter matches any type."""

    stage: Stage
    operation_name: str
    record_type: str
    handler: SignalHandler
    name: str | None = None

    @property
    def handler_name(self) -> str:
        if self.name:
            return self.name
        return getattr(self.handler, "__name__", type(self.handler).__name__)

    def matches(self, signal: ExecutionSignal) -> bool:
        if self.stage != signal.stage:
            return False
        if self.operation_name.lower() != signal.operation_name.lower():
            return False
        if not self.record_type:
            return True
        return self.record_type.lower() == signal.record_type.lower()


class RegistrationTable:
    """Immutable, ordered collection of registrations."""

    def __init__(self, registrations: Iterable[Registration] = ()) -> None:
        self._registrations: tuple[Registration, ...] = tuple(registrations)
        for reg in self._registrations:
            logger.debug(
                "registration.loaded",
                stage=reg.stage.name,
                operation=reg.operation_name,
                record_type=reg.record_type or "<any>",
                handler=reg.handler_name,
            )

    def find(self, signal: ExecutionSignal) -> Registration | None:
        """Return the first registration matching the signal, or None."""
        for reg in self._registrations:
            if reg.matches(signal):
                return reg
        return None

    def __iter__(self) -> Iterator[Registration]:
        return iter(self._registrations)

    def __len__(self) -> int:
        return len(self._registrations)


__all__ = ["Registration", "RegistrationTable"]
