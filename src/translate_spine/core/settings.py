"""Process settings for translate-spine.

Every tunable the dispatcher, the consensus engine and the translation
handler read lives here, validated once at startup and cached. Values come
from ``TRANSLATE_SPINE_*`` environment variables or a ``.env`` file.

Fields
──────
log_level                : structlog level
log_format               : ``console`` or ``json``
service_name             : service.name on every log line
log_cache_loggers        : freeze structlog loggers on first use
provider_timeout_seconds : per-provider HTTP timeout
job_timeout_seconds      : overall deadline for one fan-out (None = wait for all)
max_concurrency          : simultaneous provider calls per job
recursion_depth_limit    : handler no-ops when signal depth exceeds this
include_stack_trace      : append stack traces to handler failure details
providers_file           : YAML file of static provider descriptors

Examples:
    >>> from translate_spine.core.settings import TranslateSpineSettings
    >>> TranslateSpineSettings(max_concurrency=4).recursion_depth_limit
    2

Tags:
    settings, configuration, pydantic, environment, translate-spine
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

#: Host re-entrancy threshold. Writing the translated field raises another
#: update event; anything deeper than this is the handler's own echo.
DEFAULT_RECURSION_DEPTH_LIMIT = 2


class TranslateSpineSettings(BaseSettings):
    """Validated translate-spine configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TRANSLATE_SPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"
    service_name: str = "translate-spine"
    log_cache_loggers: bool = True

    # ── Provider fan-out ─────────────────────────────────────────
    provider_timeout_seconds: float = Field(default=10.0, gt=0)
    job_timeout_seconds: float | None = Field(default=None, gt=0)
    max_concurrency: int = Field(default=10, ge=1)

    # ── Dispatch ─────────────────────────────────────────────────
    recursion_depth_limit: int = Field(default=DEFAULT_RECURSION_DEPTH_LIMIT, ge=1)
    include_stack_trace: bool = False

    # ── Providers ────────────────────────────────────────────────
    providers_file: Path | None = Field(
        default=None,
        description="YAML file with static provider descriptors; the record store is used when unset",
    )


_settings_cache: dict[str, TranslateSpineSettings] = {}


def get_settings(
    *,
    env_file: Path | None = None,
    _force_reload: bool = False,
) -> TranslateSpineSettings:
    """Load, validate, and cache a :class:`TranslateSpineSettings` instance.

    Parameters
    ----------
    env_file:
        Explicit ``.env`` file.  Defaults to ``.env`` in the working directory.
    _force_reload:
        Bypass cache and reload.
    """
    cache_key = str(env_file or "")
    if not _force_reload and cache_key in _settings_cache:
        return _settings_cache[cache_key]

    if env_file is not None:
        settings = TranslateSpineSettings(_env_file=env_file)  # type: ignore[call-arg]
    else:
        settings = TranslateSpineSettings()

    _settings_cache[cache_key] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = [
    "DEFAULT_RECURSION_DEPTH_LIMIT",
    "TranslateSpineSettings",
    "get_settings",
    "clear_settings_cache",
]
