"""
Handler context — what a handler sees while it runs.

One context is created per dispatched signal and discarded afterwards. It
gives the handler the signal, the record store, attribute reads that look
at the triggering snapshot before asking the store, and a message buffer.
Every logged message is kept so a failure can carry the full narrative of
what the handler did before it broke.

Attribute lookup order:
    1. target record snapshot on the signal
    2. pre-image, then post-image snapshot
    3. the record store (fields an update signal did not carry)
"""

from __future__ import annotations

from typing import Any, NoReturn

from translate_spine.core.errors import (
    ErrorContext,
    HandlerExecutionFailedError,
    format_exception_chain,
)
from translate_spine.core.logging import get_logger
from translate_spine.core.protocols import EntityStore
from translate_spine.framework.signals import ExecutionSignal

logger = get_logger(__name__)


class HandlerContext:
    """Per-invocation context handed to a registered handler."""

    def __init__(self, signal: ExecutionSignal, store: EntityStore) -> None:
        self.signal = signal
        self.store = store
        self._messages: list[str] = []

    # ── Messages ─────────────────────────────────────────────────────

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    def log_message(self, message: str) -> None:
        """Record a message in the buffer and on the trace log."""
        if not message or not message.strip():
            return
        self._messages.append(message)
        logger.info(
            "handler.trace",
            message=message,
            correlation_id=self.signal.correlation_id,
            initiating_user_id=self.signal.initiating_user_id,
        )

    def failure_details(self, error: BaseException, include_stack_trace: bool = False) -> str:
        """Message chain of ``error`` followed by every logged message."""
        parts = [format_exception_chain(error, include_stack_trace), "Logged Message"]
        parts.extend(self._messages)
        return "\n".join(parts)

    def throw(self, message: str, cause: BaseException | None = None) -> NoReturn:
        """Abort the handler with a uniform failure carrying the logged messages."""
        cause = cause or RuntimeError("Error thrown by application")
        details = self.failure_details(cause)
        raise HandlerExecutionFailedError(
            f"{message} ({self.signal.operation_name}) Err Msg: {details}",
            details=details,
            cause=cause,
            context=ErrorContext(
                correlation_id=self.signal.correlation_id,
                operation=self.signal.operation_name,
                record_type=self.signal.record_type,
            ),
        )

    # ── Attribute access ─────────────────────────────────────────────

    def get_attribute_value(self, field_name: str, default: Any = None) -> Any:
        """Read a field of the subject record (snapshots first, then the store)."""
        payload = self.signal.payload
        target = payload.target_record()
        if target is not None and target.get(field_name) is not None:
            return target.get(field_name)

        for image in (payload.pre_image, payload.post_image):
            if image is not None and image.get(field_name) is not None:
                return image.get(field_name)

        ref = payload.subject_ref()
        if ref is None:
            return default
        value = self.store.read_field(ref, field_name)
        return default if value is None else value


__all__ = ["HandlerContext"]
