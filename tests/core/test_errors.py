"""Tests for translate_spine.core.errors module."""

import pytest

from translate_spine.core.errors import (
    AllProvidersFailedError,
    ConfigError,
    ConsensusError,
    ErrorCategory,
    ErrorContext,
    HandlerExecutionFailedError,
    LocaleNotFoundError,
    NoHandlerRegisteredError,
    NoProvidersConfiguredError,
    ProviderError,
    ProviderHTTPError,
    ProviderTimeoutError,
    RecordNotFoundError,
    StoreError,
    TranslateSpineError,
    format_exception_chain,
)
from translate_spine.framework.signals import Stage


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_create_empty_context(self):
        ctx = ErrorContext()
        assert ctx.correlation_id is None
        assert ctx.provider_id is None
        assert ctx.metadata == {}

    def test_to_dict_includes_set_fields(self):
        """to_dict includes only non-None fields."""
        ctx = ErrorContext(job_id="j-1", http_status=503, metadata={"attempt": 1})
        d = ctx.to_dict()
        assert d == {"job_id": "j-1", "http_status": 503, "attempt": 1}


class TestTranslateSpineError:
    """Test the base error."""

    def test_defaults(self):
        err = TranslateSpineError("Something failed")
        assert err.message == "Something failed"
        assert err.category == ErrorCategory.INTERNAL
        assert err.retryable is False
        assert err.cause is None

    def test_cause_is_chained(self):
        cause = ValueError("inner")
        err = TranslateSpineError("outer", cause=cause)
        assert err.__cause__ is cause
        assert err.to_dict()["cause"] == "inner"

    def test_with_context_sets_known_fields_and_metadata(self):
        err = TranslateSpineError("x").with_context(provider_id="p1", extra="v")
        assert err.context.provider_id == "p1"
        assert err.context.metadata == {"extra": "v"}

    def test_to_dict(self):
        err = ProviderHTTPError("HTTP 503").with_context(provider_id="p1")
        d = err.to_dict()
        assert d["error_type"] == "ProviderHTTPError"
        assert d["category"] == "NETWORK"
        assert d["retryable"] is True
        assert d["context"] == {"provider_id": "p1"}


class TestHierarchy:
    """Categories and retryability per branch."""

    @pytest.mark.parametrize(
        "error, base",
        [
            (NoHandlerRegisteredError(Stage.POST_OPERATION, "create", "x"), ConfigError),
            (NoProvidersConfiguredError(), ConfigError),
            (LocaleNotFoundError(9999), ConfigError),
            (ProviderTimeoutError("slow"), ProviderError),
            (AllProvidersFailedError(3), ConsensusError),
            (RecordNotFoundError("translation_snippet", "s-1"), StoreError),
        ],
    )
    def test_subclassing(self, error, base):
        assert isinstance(error, base)
        assert isinstance(error, TranslateSpineError)

    def test_config_errors_never_retryable(self):
        assert NoProvidersConfiguredError().retryable is False
        assert LocaleNotFoundError("xx").retryable is False

    def test_provider_errors_retryable(self):
        assert ProviderHTTPError("HTTP 500").retryable is True

    def test_no_handler_message(self):
        err = NoHandlerRegisteredError(Stage.PRE_VALIDATION, "delete", "translation_snippet")
        assert err.message == (
            "Missing handler registration. Stage: PRE_VALIDATION | "
            "Operation: delete | Record type: translation_snippet"
        )
        assert err.context.operation == "delete"

    def test_all_failed_message(self):
        err = AllProvidersFailedError(2, outcome="o")
        assert err.message == "All 2 translation provider(s) failed"
        assert err.outcome == "o"

    def test_handler_failure_details_in_dict(self):
        err = HandlerExecutionFailedError("boom", details="chain")
        assert err.to_dict()["details"] == "chain"


class TestFormatExceptionChain:
    def test_single(self):
        assert format_exception_chain(ValueError("bad")) == "An error occurred\nMessage: bad"

    def test_nested_causes(self):
        try:
            try:
                try:
                    raise ConnectionError("DNS failure")
                except ConnectionError as e:
                    raise RuntimeError("fetch failed") from e
            except RuntimeError as e:
                raise ConsensusError("job failed", cause=e)
        except ConsensusError as outer:
            text = format_exception_chain(outer)

        assert text.splitlines() == [
            "An error occurred",
            "Message: job failed",
            "Inner Exception Message:",
            "Error Message: fetch failed",
            "Error Message: DNS failure",
        ]

    def test_stack_trace_included_on_request(self):
        try:
            raise ValueError("bad")
        except ValueError as e:
            text = format_exception_chain(e, include_stack_trace=True)
        assert "Stack Trace:" in text
        assert "test_stack_trace_included_on_request" in text
