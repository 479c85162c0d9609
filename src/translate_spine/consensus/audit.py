"""Append-only audit log of provider results.

One row per attempted provider per job, written through the record store
as soon as the provider call completes. Rows are never updated. A store
failure while appending propagates to the caller.
"""

from __future__ import annotations

from typing import Any

from translate_spine.consensus.models import ProviderResult, TranslationJob
from translate_spine.core.logging import get_logger
from translate_spine.core.models import Record, RecordRef
from translate_spine.core.protocols import EntityStore

logger = get_logger(__name__)

AUDIT_RECORD_TYPE = "translation_mapping"


class AuditLog:
    """Writes ``translation_mapping`` rows keyed by ``(job_id, provider_id)``."""

    def __init__(self, store: EntityStore, record_type: str = AUDIT_RECORD_TYPE) -> None:
        self.store = store
        self.record_type = record_type

    @staticmethod
    def row_fields(job: TranslationJob, result: ProviderResult) -> dict[str, Any]:
        return {
            "job_id": job.job_id,
            "provider_id": result.provider_id,
            "provider_name": result.provider_name,
            "position": result.position,
            "language_from": job.source_locale_id if job.source_locale_id is not None else job.source_locale,
            "language_to": job.target_locale_id if job.target_locale_id is not None else job.target_locale,
            "source_text": job.source_text,
            "translated_text": result.text,
            "status": "succeeded" if result.succeeded else "failed",
            "error": str(result.error) if result.error is not None else None,
            "http_status": result.http_status,
            "duration_ms": result.duration_ms,
            "subject_type": job.subject.record_type if job.subject else None,
            "subject_id": job.subject.id if job.subject else None,
        }

    def append(self, job: TranslationJob, result: ProviderResult) -> RecordRef:
        ref = self.store.create_record(self.record_type, self.row_fields(job, result))
        logger.debug(
            "audit.appended",
            job_id=job.job_id,
            provider_id=result.provider_id,
            status="succeeded" if result.succeeded else "failed",
            row_id=ref.id,
        )
        return ref

    def rows(self, job_id: str) -> list[Record]:
        """Rows of one job, in the order they were written."""
        return self.store.query_records(self.record_type, job_id=job_id)


__all__ = ["AUDIT_RECORD_TYPE", "AuditLog"]
