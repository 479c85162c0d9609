"""
Process wiring: builds the dispatch engine and everything it injects.

Nothing here is lazy or global. The host adapter (or the CLI) calls
:func:`create_dispatch_engine` once at startup and keeps the engine.
"""

from __future__ import annotations

import httpx

from translate_spine.consensus.audit import AuditLog
from translate_spine.consensus.engine import ConsensusEngine
from translate_spine.core.logging import get_logger
from translate_spine.core.protocols import EntityStore
from translate_spine.core.settings import TranslateSpineSettings, get_settings
from translate_spine.framework.dispatcher import DispatchEngine
from translate_spine.framework.registry import RegistrationTable
from translate_spine.providers.registry import (
    ProviderRegistry,
    StaticProviderRegistry,
    StoreProviderRegistry,
)
from translate_spine.translation.handler import TranslationHandler, build_registrations
from translate_spine.translation.locales import LocaleResolver

logger = get_logger(__name__)


def create_provider_registry(
    store: EntityStore,
    settings: TranslateSpineSettings,
) -> ProviderRegistry:
    """Static providers when a providers file is configured, store records otherwise."""
    if settings.providers_file is not None:
        return StaticProviderRegistry.from_file(settings.providers_file)
    return StoreProviderRegistry(store)


def create_dispatch_engine(
    store: EntityStore,
    settings: TranslateSpineSettings | None = None,
    *,
    providers: ProviderRegistry | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DispatchEngine:
    """
    Build a dispatch engine with the translation handler registered.

    Args:
        store: Record store port implementation
        settings: Process settings (defaults to :func:`get_settings`)
        providers: Provider registry override
        transport: httpx transport override for provider calls

    Returns:
        Ready-to-use DispatchEngine
    """
    settings = settings or get_settings()
    providers = providers or create_provider_registry(store, settings)

    engine = ConsensusEngine(
        AuditLog(store),
        transport=transport,
        provider_timeout_seconds=settings.provider_timeout_seconds,
        job_timeout_seconds=settings.job_timeout_seconds,
        max_concurrency=settings.max_concurrency,
    )
    handler = TranslationHandler(
        engine,
        providers,
        LocaleResolver(store),
        recursion_depth_limit=settings.recursion_depth_limit,
    )
    table = RegistrationTable(build_registrations(handler))

    logger.info(
        "bootstrap.ready",
        registrations=len(table),
        provider_source=type(providers).__name__,
        max_concurrency=settings.max_concurrency,
    )
    return DispatchEngine(table, store, include_stack_trace=settings.include_stack_trace)


__all__ = ["create_provider_registry", "create_dispatch_engine"]
