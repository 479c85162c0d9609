"""Job, per-provider result and consensus outcome types."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from translate_spine.core.models import RecordRef
from translate_spine.core.result import Err, Result


@dataclass(frozen=True)
class TranslationJob:
    """
    One text to translate.

    ``source_locale`` / ``target_locale`` are the resolved language codes
    sent to providers; the raw locale ids are kept for the audit row.
    """

    source_locale: str
    target_locale: str
    source_text: str
    subject: RecordRef | None = None
    job_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    source_locale_id: Any = None
    target_locale_id: Any = None


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of calling one provider for one job. Never updated once built."""

    provider_id: str
    outcome: Result[str]
    position: int
    provider_name: str | None = None
    duration_ms: float | None = None
    http_status: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome.is_ok()

    @property
    def text(self) -> str | None:
        return self.outcome.unwrap_or(None)

    @property
    def error(self) -> Exception | None:
        return self.outcome.error if isinstance(self.outcome, Err) else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider_id": self.provider_id,
            "provider_name": self.provider_name,
            "position": self.position,
            "succeeded": self.succeeded,
            "text": self.text,
            "error": str(self.error) if self.error is not None else None,
            "duration_ms": self.duration_ms,
            "http_status": self.http_status,
        }


@dataclass
class ConsensusOutcome:
    """Reduced result of a job. ``final_text`` is None when nothing could be chosen."""

    job_id: str
    final_text: str | None
    agreement: int
    results: list[ProviderResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.succeeded)

    def to_dict(self) -> dict[str, Any]:
        return {
            "job_id": self.job_id,
            "final_text": self.final_text,
            "agreement": self.agreement,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }


__all__ = ["TranslationJob", "ProviderResult", "ConsensusOutcome"]
