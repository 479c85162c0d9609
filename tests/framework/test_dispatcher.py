"""Tests for DispatchEngine.execute()."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

from structlog.testing import capture_logs

from translate_spine.core.errors import HandlerExecutionFailedError, NoHandlerRegisteredError
from translate_spine.core.result import Err, Ok
from translate_spine.framework.dispatcher import DispatchEngine
from translate_spine.framework.registry import Registration, RegistrationTable
from translate_spine.framework.signals import Stage


def _engine(store, *registrations: Registration, **kwargs) -> DispatchEngine:
    return DispatchEngine(RegistrationTable(registrations), store, **kwargs)


# ── Routing ──────────────────────────────────────────────────────────────


class TestRouting:
    def test_no_match_returns_error_and_invokes_nothing(self, store, signal_for):
        handler = MagicMock()
        engine = _engine(store, Registration(Stage.POST_OPERATION, "create", "translation_snippet", handler))

        result = engine.execute(signal_for("delete", stage=Stage.PRE_VALIDATION))

        assert isinstance(result, Err)
        assert isinstance(result.error, NoHandlerRegisteredError)
        assert result.error.operation == "delete"
        assert result.error.record_type == "translation_snippet"
        assert result.error.stage is Stage.PRE_VALIDATION
        handler.assert_not_called()
        assert store.operations == []

    def test_single_invocation_even_with_overlap(self, store, signal_for):
        first, second = MagicMock(), MagicMock()
        engine = _engine(
            store,
            Registration(Stage.POST_OPERATION, "update", "translation_snippet", first),
            Registration(Stage.POST_OPERATION, "update", "", second),
        )

        result = engine.execute(signal_for("update"))

        assert result == Ok(None)
        first.assert_called_once()
        second.assert_not_called()

    def test_handler_receives_context(self, store, signal_for):
        handler = MagicMock()
        engine = _engine(store, Registration(Stage.POST_OPERATION, "update", "", handler))
        signal = signal_for("update")

        engine.execute(signal)

        context = handler.call_args.args[0]
        assert context.signal is signal
        assert context.store is store


# ── Failure normalisation ────────────────────────────────────────────────


class TestFailures:
    def test_any_exception_becomes_handler_failure(self, store, signal_for):
        def handler(context):
            context.log_message("about to fail")
            try:
                raise ConnectionError("DNS failure")
            except ConnectionError as e:
                raise RuntimeError("fetch failed") from e

        engine = _engine(store, Registration(Stage.POST_OPERATION, "update", "", handler))
        result = engine.execute(signal_for("update", correlation_id="c-9"))

        assert isinstance(result, Err)
        error = result.error
        assert isinstance(error, HandlerExecutionFailedError)
        assert isinstance(error.cause, RuntimeError)
        assert "Message: fetch failed" in error.details
        assert "Error Message: DNS failure" in error.details
        assert "Logged Message" in error.details
        assert "about to fail" in error.details
        assert error.context.correlation_id == "c-9"

    def test_stack_trace_optional(self, store, signal_for):
        def handler(context):
            raise ValueError("bad")

        with_trace = _engine(
            store, Registration(Stage.POST_OPERATION, "update", "", handler), include_stack_trace=True
        )
        without = _engine(store, Registration(Stage.POST_OPERATION, "update", "", handler))

        assert "Stack Trace:" in with_trace.execute(signal_for("update")).error.details
        assert "Stack Trace:" not in without.execute(signal_for("update")).error.details

    def test_thrown_failure_returned_unchanged(self, store, signal_for):
        def handler(context):
            context.throw("Fault Exception Occurred", ValueError("inner"))

        engine = _engine(store, Registration(Stage.POST_OPERATION, "update", "", handler))
        result = engine.execute(signal_for("update"))

        assert result.error.message.startswith("Fault Exception Occurred (update) Err Msg:")


# ── Diagnostics ──────────────────────────────────────────────────────────


class TestDiagnostics:
    def test_entry_and_exit_logged_with_trace_ids(self, store, signal_for):
        engine = _engine(store, Registration(Stage.POST_OPERATION, "update", "", MagicMock()))

        with capture_logs() as logs:
            engine.execute(signal_for("update", correlation_id="c-1", initiating_user_id="u-1"))

        entered = next(e for e in logs if e["event"] == "dispatch.entered")
        exited = next(e for e in logs if e["event"] == "dispatch.exited")
        for entry in (entered, exited):
            assert entry["correlation_id"] == "c-1"
            assert entry["initiating_user_id"] == "u-1"
        assert exited["status"] == "completed"

    def test_no_handler_logged(self, store, signal_for):
        engine = _engine(store)
        with capture_logs() as logs:
            engine.execute(signal_for("update"))
        events = [e["event"] for e in logs]
        assert "dispatch.no_handler" in events
        assert next(e for e in logs if e["event"] == "dispatch.exited")["status"] == "failed"


class TestConcurrency:
    def test_concurrent_execute(self, store, signal_for):
        calls: list[str] = []

        def handler(context):
            calls.append(context.signal.correlation_id)

        engine = _engine(store, Registration(Stage.POST_OPERATION, "update", "", handler))
        signals = [signal_for("update", correlation_id=f"c-{i}") for i in range(20)]

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(engine.execute, signals))

        assert all(r.is_ok() for r in results)
        assert sorted(calls) == sorted(s.correlation_id for s in signals)
