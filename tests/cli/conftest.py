"""CLI test fixtures: real logging, reset after every command."""

from __future__ import annotations

import pytest
import structlog


@pytest.fixture(autouse=True)
def _fresh_logging(monkeypatch):
    # CliRunner closes its streams; cached loggers would keep writing to them
    monkeypatch.setenv("TRANSLATE_SPINE_LOG_CACHE_LOGGERS", "false")
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
