"""Core primitives: errors, Result, logging, settings, record shapes and the store port."""

from translate_spine.core.errors import (
    AllProvidersFailedError,
    ConfigError,
    ConsensusError,
    DispatchError,
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
)
from translate_spine.core.models import Record, RecordRef, RecordSchema
from translate_spine.core.protocols import EntityStore, SignalHandler
from translate_spine.core.result import Err, Ok, Result

__all__ = [
    "AllProvidersFailedError",
    "ConfigError",
    "ConsensusError",
    "DispatchError",
    "ErrorCategory",
    "ErrorContext",
    "HandlerExecutionFailedError",
    "LocaleNotFoundError",
    "NoHandlerRegisteredError",
    "NoProvidersConfiguredError",
    "ProviderError",
    "ProviderHTTPError",
    "ProviderTimeoutError",
    "RecordNotFoundError",
    "StoreError",
    "TranslateSpineError",
    "Record",
    "RecordRef",
    "RecordSchema",
    "EntityStore",
    "SignalHandler",
    "Err",
    "Ok",
    "Result",
]
