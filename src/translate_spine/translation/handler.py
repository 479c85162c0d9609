"""
Translation Handler — the registered reaction to snippet create/update.

Flow for one signal:

1. Skip when the signal depth exceeds the recursion limit. Writing the
   translated text raises another update signal at a deeper depth; that
   echo must not translate again.
2. Resolve the subject record and read ``source_text``, ``language_from``
   and ``language_to`` through the handler context.
3. Skip when the text or either locale is missing or blank.
4. Resolve both locales to codes, build a :class:`TranslationJob` and hand
   it to the consensus engine with the registry's eligible providers.
5. Write the winning text to ``translated_text`` with a single update.

A failed consensus (no providers, every provider failed, empty winner)
aborts through :meth:`HandlerContext.throw`, carrying the messages logged
so far. Other failures (unknown locale, store error) raise as they are and
the dispatcher wraps them. Either way the record is left untouched.
"""

from __future__ import annotations

from typing import Any

from translate_spine.consensus.engine import ConsensusEngine
from translate_spine.consensus.models import ConsensusOutcome, TranslationJob
from translate_spine.core.errors import ConsensusError
from translate_spine.core.logging import get_logger
from translate_spine.core.models import RecordRef
from translate_spine.core.result import Err, Ok
from translate_spine.core.settings import DEFAULT_RECURSION_DEPTH_LIMIT
from translate_spine.framework.context import HandlerContext
from translate_spine.framework.registry import Registration
from translate_spine.framework.signals import Stage
from translate_spine.providers.registry import ProviderRegistry
from translate_spine.translation.locales import LocaleResolver

logger = get_logger(__name__)

SNIPPET_RECORD_TYPE = "translation_snippet"
SOURCE_TEXT_FIELD = "source_text"
LANGUAGE_FROM_FIELD = "language_from"
LANGUAGE_TO_FIELD = "language_to"
TRANSLATED_TEXT_FIELD = "translated_text"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class TranslationHandler:
    """Translates a snippet by provider consensus and writes the result back."""

    def __init__(
        self,
        engine: ConsensusEngine,
        providers: ProviderRegistry,
        locales: LocaleResolver,
        *,
        recursion_depth_limit: int = DEFAULT_RECURSION_DEPTH_LIMIT,
    ) -> None:
        self.engine = engine
        self.providers = providers
        self.locales = locales
        self.recursion_depth_limit = recursion_depth_limit

    def __call__(self, context: HandlerContext) -> None:
        signal = context.signal

        if signal.depth > self.recursion_depth_limit:
            logger.info(
                "translation.skipped",
                reason="depth",
                depth=signal.depth,
                limit=self.recursion_depth_limit,
                correlation_id=signal.correlation_id,
            )
            return

        subject = signal.payload.subject_ref()
        if subject is None:
            logger.info("translation.skipped", reason="no_subject", correlation_id=signal.correlation_id)
            return

        values = {
            name: context.get_attribute_value(name)
            for name in (SOURCE_TEXT_FIELD, LANGUAGE_FROM_FIELD, LANGUAGE_TO_FIELD)
        }
        missing = [name for name, value in values.items() if _is_blank(value)]
        if missing:
            schema = context.store.read_schema(subject.record_type)
            labels = ", ".join(schema.display_name(name) for name in missing)
            context.log_message(f"Nothing to translate on {subject.id}: {labels} not set")
            logger.info(
                "translation.skipped",
                reason="incomplete",
                record_id=subject.id,
                missing_fields=missing,
                correlation_id=signal.correlation_id,
            )
            return

        source_text = values[SOURCE_TEXT_FIELD]
        language_from = values[LANGUAGE_FROM_FIELD]
        language_to = values[LANGUAGE_TO_FIELD]

        source_locale, target_locale = self.locales.resolve_pair(language_from, language_to)
        job = TranslationJob(
            source_locale=source_locale,
            target_locale=target_locale,
            source_text=str(source_text),
            subject=subject,
            source_locale_id=language_from,
            target_locale_id=language_to,
        )
        context.log_message(
            f"Translating {subject.record_type}({subject.id}) "
            f"from {source_locale} to {target_locale}, job {job.job_id}"
        )

        match self.engine.translate(job, self.providers.list_eligible_providers()):
            case Err(error):
                context.throw(f"Translation job {job.job_id} failed", error)
            case Ok(outcome):
                if not outcome.final_text:
                    context.throw(
                        f"Translation job {job.job_id} failed",
                        ConsensusError("Consensus produced an empty translation").with_context(
                            job_id=job.job_id
                        ),
                    )
                self._write_back(context, subject, job, outcome)

    def _write_back(
        self,
        context: HandlerContext,
        subject: RecordRef,
        job: TranslationJob,
        outcome: ConsensusOutcome,
    ) -> None:
        """Single update: primary key plus the translated text."""
        signal = context.signal
        schema = context.store.read_schema(subject.record_type)
        context.store.write_fields(
            subject,
            {schema.primary_key: subject.id, TRANSLATED_TEXT_FIELD: outcome.final_text},
        )
        context.log_message(
            f"Wrote {TRANSLATED_TEXT_FIELD} on {subject.id} "
            f"({outcome.agreement} of {len(outcome.results)} provider(s) agreed)"
        )
        logger.info(
            "translation.completed",
            job_id=job.job_id,
            record_id=subject.id,
            agreement=outcome.agreement,
            succeeded=outcome.succeeded,
            failed=outcome.failed,
            correlation_id=signal.correlation_id,
        )


def build_registrations(handler: TranslationHandler) -> list[Registration]:
    """Post-operation ``create`` and ``update`` on translation snippets."""
    return [
        Registration(Stage.POST_OPERATION, "create", SNIPPET_RECORD_TYPE, handler),
        Registration(Stage.POST_OPERATION, "update", SNIPPET_RECORD_TYPE, handler),
    ]


__all__ = [
    "SNIPPET_RECORD_TYPE",
    "SOURCE_TEXT_FIELD",
    "LANGUAGE_FROM_FIELD",
    "LANGUAGE_TO_FIELD",
    "TRANSLATED_TEXT_FIELD",
    "TranslationHandler",
    "build_registrations",
]
