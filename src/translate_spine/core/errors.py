"""
Structured error types for translate-spine.

Every failure that leaves a component does so as a typed error carrying a
category, a retryable flag, structured context and the chained cause. The
dispatcher, the consensus engine and the translation handler all speak this
hierarchy, so the host boundary sees one vocabulary regardless of where the
failure started.

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                     TranslateSpineError                          │
        │  (category, retryable, context, cause)                          │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  ConfigError             ProviderError        ConsensusError     │
        │  (CONFIG)                (PROVIDER)           (CONSENSUS)        │
        │       │                       │                    │             │
        │  NoHandlerRegistered     ProviderHTTPError    AllProvidersFailed │
        │  NoProvidersConfigured   ProviderTimeoutError                    │
        │  LocaleNotFound                                                  │
        │                                                                  │
        │  DispatchError           StoreError                              │
        │  (DISPATCH)              (STORE)                                 │
        │       │                       │                                  │
        │  HandlerExecutionFailed  RecordNotFoundError                     │
        └─────────────────────────────────────────────────────────────────┘

Propagation:
    - **ProviderError:** recovered locally by the consensus engine (logged,
      excluded from the vote), never fatal to the job.
    - **Everything else:** returned or raised to the immediate caller typed.

Examples:
    >>> error = NoProvidersConfiguredError()
    >>> error.category
    <ErrorCategory.CONFIG: 'CONFIG'>
    >>> error.with_context(job_id="j-1").context.job_id
    'j-1'

Tags:
    error-handling, exception-hierarchy, error-context, translate-spine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    # Configuration (never retryable)
    CONFIG = "CONFIG"
    # Dispatch pipeline
    DISPATCH = "DISPATCH"
    # Outbound translation providers
    PROVIDER = "PROVIDER"
    NETWORK = "NETWORK"
    # Result reduction
    CONSENSUS = "CONSENSUS"
    # Host record store
    STORE = "STORE"
    # Internal errors
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Typed fields cover what the dispatcher and the consensus engine know at
    failure time; anything else goes into ``metadata``.

    Attributes:
        correlation_id: Host request-correlation identifier
        operation: Operation name of the triggering signal (create, update)
        record_type: Record type of the triggering signal
        job_id: Translation job identifier
        provider_id: Provider the error belongs to
        url: Endpoint that was being called
        http_status: HTTP status code if applicable
        metadata: Additional key-value pairs
    """

    correlation_id: str | None = None
    operation: str | None = None
    record_type: str | None = None
    job_id: str | None = None
    provider_id: str | None = None
    url: str | None = None
    http_status: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["correlation_id", "operation", "record_type", "job_id",
                    "provider_id", "url", "http_status"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class TranslateSpineError(Exception):
    """
    Base exception for all translate-spine errors.

    Subclasses set ``default_category`` and ``default_retryable`` so call
    sites only pass what differs from the defaults.

    Examples:
        >>> error = TranslateSpineError("Something went wrong")
        >>> error.retryable
        False
        >>> error.to_dict()["category"]
        'INTERNAL'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TranslateSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ProviderHTTPError("HTTP 503").with_context(
                provider_id="deepl",
                url="https://api.example.com/translate"
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(TranslateSpineError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class NoHandlerRegisteredError(ConfigError):
    """No registration matches the signal's stage, operation and record type."""

    def __init__(self, stage: Any, operation: str, record_type: str):
        self.stage = stage
        self.operation = operation
        self.record_type = record_type
        stage_label = getattr(stage, "name", stage)
        super().__init__(
            f"Missing handler registration. Stage: {stage_label} | "
            f"Operation: {operation} | Record type: {record_type or '<any>'}",
            context=ErrorContext(operation=operation, record_type=record_type),
        )


class NoProvidersConfiguredError(ConfigError):
    """Translation cannot proceed with zero providers."""

    def __init__(self, message: str = "No translation providers available"):
        super().__init__(message)


class LocaleNotFoundError(ConfigError):
    """A locale id has no language code in the locale catalogue."""

    def __init__(self, locale_id: Any):
        self.locale_id = locale_id
        super().__init__(f"No language code configured for locale {locale_id!r}")


# =============================================================================
# PROVIDER ERRORS (isolated per provider)
# =============================================================================


class ProviderError(TranslateSpineError):
    """One provider's call failed. Excluded from consensus, never fatal."""

    default_category = ErrorCategory.PROVIDER
    default_retryable = True


class ProviderHTTPError(ProviderError):
    """Provider answered with a non-2xx status or could not be reached."""

    default_category = ErrorCategory.NETWORK


class ProviderTimeoutError(ProviderError):
    """Provider did not answer within the per-call timeout."""

    default_category = ErrorCategory.NETWORK


# =============================================================================
# CONSENSUS ERRORS
# =============================================================================


class ConsensusError(TranslateSpineError):
    """Result reduction failed for the job."""

    default_category = ErrorCategory.CONSENSUS
    default_retryable = False


class AllProvidersFailedError(ConsensusError):
    """Every attempted provider failed; there is nothing to vote on."""

    def __init__(self, attempted: int, outcome: Any = None):
        self.attempted = attempted
        self.outcome = outcome
        super().__init__(f"All {attempted} translation provider(s) failed")


# =============================================================================
# DISPATCH ERRORS
# =============================================================================


class DispatchError(TranslateSpineError):
    """Failure raised on the dispatch path."""

    default_category = ErrorCategory.DISPATCH
    default_retryable = False


class HandlerExecutionFailedError(DispatchError):
    """
    Uniform wrapper for any failure raised inside a handler.

    ``details`` holds the full message chain followed by the messages the
    handler logged before failing.
    """

    def __init__(self, message: str, *, details: str = "", cause: BaseException | None = None, **kwargs: Any):
        super().__init__(message, cause=cause, **kwargs)
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# STORE ERRORS
# =============================================================================


class StoreError(TranslateSpineError):
    """Record store read/write failure."""

    default_category = ErrorCategory.STORE
    default_retryable = False


class RecordNotFoundError(StoreError):
    """Referenced record does not exist in the store."""

    def __init__(self, record_type: str, record_id: str):
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(f"Record not found: {record_type}({record_id})")


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def _iter_chain(error: BaseException):
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def format_exception_chain(error: BaseException, include_stack_trace: bool = False) -> str:
    """
    Render an exception and every nested cause as readable text.

    The outer message comes first, followed by one ``Error Message:`` line
    per nested cause (``__cause__`` first, then ``__context__``). Stack
    traces are appended per exception when requested.

    Examples:
        >>> try:
        ...     try:
        ...         raise ConnectionError("DNS failure")
        ...     except ConnectionError as e:
        ...         raise RuntimeError("fetch failed") from e
        ... except RuntimeError as outer:
        ...     print(format_exception_chain(outer))
        An error occurred
        Message: fetch failed
        Inner Exception Message:
        Error Message: DNS failure
    """
    lines = ["An error occurred"]
    for depth, exc in enumerate(_iter_chain(error)):
        message = str(exc) or exc.__class__.__name__
        if depth == 0:
            lines.append(f"Message: {message}")
        else:
            if depth == 1:
                lines.append("Inner Exception Message:")
            lines.append(f"Error Message: {message}")
        if include_stack_trace and exc.__traceback__ is not None:
            stack = "".join(traceback.format_tb(exc.__traceback__)).rstrip()
            lines.append(f"Stack Trace: {stack}")
    return "\n".join(lines)


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "TranslateSpineError",
    # Config
    "ConfigError",
    "NoHandlerRegisteredError",
    "NoProvidersConfiguredError",
    "LocaleNotFoundError",
    # Provider
    "ProviderError",
    "ProviderHTTPError",
    "ProviderTimeoutError",
    # Consensus
    "ConsensusError",
    "AllProvidersFailedError",
    # Dispatch
    "DispatchError",
    "HandlerExecutionFailedError",
    # Store
    "StoreError",
    "RecordNotFoundError",
    # Utilities
    "format_exception_chain",
]
