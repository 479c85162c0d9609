"""
Shared pytest fixtures for translate-spine tests.

This module provides:
- A seeded in-memory record store (snippet schema, locales, one snippet)
- A provider descriptor factory
- ``provider_transport``: an ``httpx.MockTransport`` answering per provider host
- Settings cache cleanup between tests

Usage:
    def test_something(store, make_provider, provider_transport):
        transport = provider_transport({"p1": "Bonjour", "p2": 503})
        ...
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import httpx
import pytest

# Ensure translate_spine is importable without an install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from translate_spine.core.models import Record, RecordRef, RecordSchema
from translate_spine.core.settings import clear_settings_cache
from translate_spine.framework.signals import ExecutionSignal, SignalPayload, Stage
from translate_spine.providers.models import AuthPlacement, HttpVerb, ProviderDescriptor
from translate_spine.store.memory import InMemoryEntityStore

SNIPPET_ID = "snip-1"


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture(autouse=True)
def _clear_settings() -> Generator[None, None, None]:
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Record store
# =============================================================================


@pytest.fixture
def store() -> InMemoryEntityStore:
    """Store with the snippet schema, two locales and one untranslated snippet."""
    s = InMemoryEntityStore()
    s.add_schema(
        RecordSchema(
            record_type="translation_snippet",
            primary_key="translation_snippet_id",
            fields=frozenset({"source_text", "language_from", "language_to", "translated_text"}),
        )
    )
    s.add_record("language_locale", "loc-en", localeid=1033, code="en")
    s.add_record("language_locale", "loc-fr", localeid=1036, code="fr")
    s.add_record(
        "translation_snippet",
        SNIPPET_ID,
        source_text="Hello",
        language_from=1033,
        language_to=1036,
    )
    return s


@pytest.fixture
def snippet_ref() -> RecordRef:
    return RecordRef("translation_snippet", SNIPPET_ID)


def make_signal(
    operation: str = "update",
    *,
    depth: int = 1,
    record_type: str = "translation_snippet",
    stage: Stage = Stage.POST_OPERATION,
    target: Record | RecordRef | None = None,
    **kwargs: Any,
) -> ExecutionSignal:
    """Signal about the seeded snippet unless ``target`` says otherwise."""
    if target is None:
        target = RecordRef(record_type, SNIPPET_ID)
    return ExecutionSignal(
        stage=stage,
        operation_name=operation,
        record_type=record_type,
        depth=depth,
        payload=SignalPayload(target=target),
        **kwargs,
    )


@pytest.fixture
def signal_for() -> Callable[..., ExecutionSignal]:
    return make_signal


# =============================================================================
# Providers
# =============================================================================


@pytest.fixture
def make_provider() -> Callable[..., ProviderDescriptor]:
    """Factory for eligible descriptors; endpoint host is ``<id>.example.test``."""

    def _make(provider_id: str, **overrides: Any) -> ProviderDescriptor:
        values: dict[str, Any] = {
            "id": provider_id,
            "name": provider_id.upper(),
            "endpoint_url": f"https://{provider_id}.example.test/translate",
            "http_verb": HttpVerb.POST,
            "auth_placement": AuthPlacement.HEADER,
            "key_name": "X-Api-Key",
            "key_secret": f"secret-{provider_id}",
            "text_param": "q",
            "source_lang_param": "source",
            "target_lang_param": "target",
        }
        values.update(overrides)
        return ProviderDescriptor(**values)

    return _make


def host_of(provider_id: str) -> str:
    return f"{provider_id}.example.test"


@pytest.fixture
def provider_transport() -> Callable[..., httpx.MockTransport]:
    """
    Build a MockTransport from ``{provider_id: answer}``.

    An answer is a response body (``str``), an HTTP status (``int``, empty
    body) or an exception instance to raise. Every request seen is appended
    to ``transport.requests``.
    """

    def _build(answers: dict[str, Any]) -> httpx.MockTransport:
        by_host = {host_of(pid): answer for pid, answer in answers.items()}
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            answer = by_host.get(request.url.host, 404)
            if isinstance(answer, BaseException):
                raise answer
            if isinstance(answer, int):
                return httpx.Response(answer)
            return httpx.Response(200, text=answer)

        transport = httpx.MockTransport(handler)
        transport.requests = seen  # type: ignore[attr-defined]
        return transport

    return _build
