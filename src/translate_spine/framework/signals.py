"""
Execution signals — the inbound "something happened to a record" event.

A signal is built once per invocation at the host boundary and is
read-only afterwards. It carries the pipeline stage, the operation name,
the record type, the host's recursion depth, the triggering record with
its before/after snapshots, and the identifiers the dispatcher puts on
every trace line.

Examples:
    >>> from translate_spine.core.models import Record
    >>> signal = ExecutionSignal(
    ...     stage=Stage.POST_OPERATION,
    ...     operation_name="Update",
    ...     record_type="translation_snippet",
    ...     payload=SignalPayload(target=Record("translation_snippet", "s-1")),
    ... )
    >>> signal.payload.subject_ref().id
    's-1'
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from translate_spine.core.models import Record, RecordRef


class Stage(IntEnum):
    """Pipeline phase, using the host's numeric stage codes."""

    PRE_VALIDATION = 10
    PRE_OPERATION = 20
    MAIN_OPERATION = 30
    POST_OPERATION = 40

    @classmethod
    def parse(cls, value: Any) -> Stage:
        """Accept a stage code, a member name or a member (``40``, ``"post_operation"``)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) or (isinstance(value, str) and value.isdigit()):
            return cls(int(value))
        return cls[str(value).strip().upper().replace("-", "_")]


@dataclass(frozen=True)
class SignalPayload:
    """Triggering record and its snapshots."""

    target: Record | RecordRef | None = None
    moniker: RecordRef | None = None
    pre_image: Record | None = None
    post_image: Record | None = None

    def subject_ref(self) -> RecordRef | None:
        """Reference of the record the signal is about; the explicit moniker wins."""
        if self.moniker is not None:
            return self.moniker
        if isinstance(self.target, Record):
            return self.target.to_ref()
        return self.target

    def target_record(self) -> Record | None:
        return self.target if isinstance(self.target, Record) else None


@dataclass(frozen=True)
class ExecutionSignal:
    """One inbound event. Name fields compare case-insensitively."""

    stage: Stage
    operation_name: str
    record_type: str = ""
    depth: int = 1
    payload: SignalPayload = field(default_factory=SignalPayload)
    correlation_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    initiating_user_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExecutionSignal:
        """Build a signal from a plain mapping (CLI signal files, host adapters)."""

        def _ref(value: dict[str, Any] | None) -> RecordRef | None:
            if not value:
                return None
            return RecordRef(value["record_type"], str(value["id"]), value.get("name"))

        def _record(value: dict[str, Any] | None) -> Record | None:
            if not value:
                return None
            fields = {k.lower(): v for k, v in (value.get("fields") or {}).items()}
            return Record(value["record_type"], str(value["id"]), fields)

        target_data = data.get("target")
        target: Record | RecordRef | None
        if target_data and "fields" in target_data:
            target = _record(target_data)
        else:
            target = _ref(target_data)

        return cls(
            stage=Stage.parse(data.get("stage", Stage.POST_OPERATION)),
            operation_name=str(data["operation"]),
            record_type=str(data.get("record_type") or ""),
            depth=int(data.get("depth", 1)),
            payload=SignalPayload(
                target=target,
                moniker=_ref(data.get("moniker")),
                pre_image=_record(data.get("pre_image")),
                post_image=_record(data.get("post_image")),
            ),
            correlation_id=str(data.get("correlation_id") or uuid.uuid4()),
            initiating_user_id=data.get("initiating_user_id"),
        )


__all__ = ["Stage", "SignalPayload", "ExecutionSignal"]
