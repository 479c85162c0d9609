"""
Dispatch engine — routes one execution signal to at most one handler.

The host calls :meth:`DispatchEngine.execute` once per event. The engine
finds the first matching registration, runs its handler exactly once, and
returns ``Ok(None)`` or an ``Err`` holding a typed error:

- ``NoHandlerRegisteredError`` when nothing matches (configuration error,
  never swallowed, no handler runs);
- ``HandlerExecutionFailedError`` for anything raised inside the handler,
  whatever its original type, carrying the nested message chain and the
  messages the handler logged.

Entry and exit are logged with the correlation id and initiating user of
the signal. The engine holds no mutable state beyond the read-only
registration table, so one instance serves concurrent signals.
"""

from __future__ import annotations

import time

from translate_spine.core.errors import (
    ErrorContext,
    HandlerExecutionFailedError,
    NoHandlerRegisteredError,
)
from translate_spine.core.logging import LogContext, get_logger
from translate_spine.core.protocols import EntityStore
from translate_spine.core.result import Err, Ok, Result
from translate_spine.framework.context import HandlerContext
from translate_spine.framework.registry import RegistrationTable
from translate_spine.framework.signals import ExecutionSignal

log = get_logger(__name__)


class DispatchEngine:
    """
    Signal dispatcher.

    Synchronous: the handler runs on the caller's thread and ``execute``
    returns when it is done. No retry; retry policy belongs to the host.
    """

    def __init__(
        self,
        table: RegistrationTable,
        store: EntityStore,
        *,
        name: str = "DispatchEngine",
        include_stack_trace: bool = False,
    ) -> None:
        self.table = table
        self.store = store
        self.name = name
        self.include_stack_trace = include_stack_trace

    def execute(self, signal: ExecutionSignal) -> Result[None]:
        """
        Dispatch a signal.

        Args:
            signal: The inbound event

        Returns:
            ``Ok(None)`` when the handler completed, ``Err`` with
            ``NoHandlerRegisteredError`` or ``HandlerExecutionFailedError``
            otherwise
        """
        context = HandlerContext(signal, self.store)
        trace_ids = {
            "correlation_id": signal.correlation_id,
            "initiating_user_id": signal.initiating_user_id,
        }
        started = time.perf_counter()
        outcome = "failed"

        with LogContext(
            **trace_ids,
            operation=signal.operation_name,
            record_type=signal.record_type,
        ):
            log.info(
                "dispatch.entered",
                engine=self.name,
                stage=signal.stage.name,
                depth=signal.depth,
                **trace_ids,
            )
            context.log_message(f"Entered {self.name}.execute()")
            try:
                registration = self.table.find(signal)
                if registration is None:
                    error = NoHandlerRegisteredError(
                        signal.stage, signal.operation_name, signal.record_type
                    )
                    error.with_context(correlation_id=signal.correlation_id)
                    log.error(
                        "dispatch.no_handler",
                        error_type="NoHandlerRegisteredError",
                        error_message=error.message,
                        stage=signal.stage.name,
                        **trace_ids,
                    )
                    return Err(error)

                context.log_message(
                    f"{registration.handler_name} is firing for record type: "
                    f"{signal.record_type}, operation: {signal.operation_name}"
                )
                try:
                    registration.handler(context)
                except HandlerExecutionFailedError as e:
                    log.error(
                        "dispatch.handler_failed",
                        handler=registration.handler_name,
                        error_type=type(e).__name__,
                        error_message=e.message,
                        **trace_ids,
                    )
                    return Err(e)
                except Exception as e:
                    details = context.failure_details(e, self.include_stack_trace)
                    log.error(
                        "dispatch.handler_failed",
                        handler=registration.handler_name,
                        error_type=type(e).__name__,
                        error_message=str(e),
                        details=details,
                        **trace_ids,
                    )
                    return Err(
                        HandlerExecutionFailedError(
                            f"{registration.handler_name} failed "
                            f"({signal.operation_name}): {e}",
                            details=details,
                            cause=e,
                            context=ErrorContext(
                                correlation_id=signal.correlation_id,
                                operation=signal.operation_name,
                                record_type=signal.record_type,
                            ),
                        )
                    )

                outcome = "completed"
                return Ok(None)
            finally:
                context.log_message(f"Exiting {self.name}.execute()")
                log.info(
                    "dispatch.exited",
                    engine=self.name,
                    status=outcome,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                    **trace_ids,
                )


__all__ = ["DispatchEngine"]
