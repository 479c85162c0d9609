"""Consensus Engine — asyncio fan-out to translation providers plus majority vote.

ARCHITECTURE
────────────
::

    ConsensusEngine.translate(job, providers)          (sync entry point)
      └── translate_async(job, providers)
            ├── one task per provider, bounded by Semaphore(max_concurrency)
            │     ├── call_provider()  ─ exactly one HTTP request, isolated
            │     └── AuditLog.append() ─ as soon as the call completes
            ├── asyncio.wait(tasks, timeout=job_timeout_seconds)
            └── select_consensus()    ─ over recorded successes, registry order

A provider failure is a failed ProviderResult, never an exception. When the
job deadline passes, calls still in flight are cancelled; results already
recorded remain valid input, the others are absent from both the audit log
and the vote. There is no retry.

Example::

    engine = ConsensusEngine(AuditLog(store), max_concurrency=5)
    match engine.translate(job, registry.list_eligible_providers()):
        case Ok(outcome):
            print(outcome.final_text, outcome.agreement)
        case Err(error):
            print(error)
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

import httpx

from translate_spine.consensus.audit import AuditLog
from translate_spine.consensus.models import ConsensusOutcome, ProviderResult, TranslationJob
from translate_spine.consensus.selection import select_consensus
from translate_spine.core.errors import AllProvidersFailedError, NoProvidersConfiguredError
from translate_spine.core.logging import get_logger
from translate_spine.core.result import Err, Ok, Result
from translate_spine.providers.http import call_provider
from translate_spine.providers.models import ProviderDescriptor

logger = get_logger(__name__)


class ConsensusEngine:
    """Runs one translation job against many providers and reduces the answers.

    Parameters
    ----------
    audit : AuditLog
        Where every provider result is appended.
    transport : httpx.AsyncBaseTransport, optional
        Transport for the per-job client (``httpx.MockTransport`` in tests).
    provider_timeout_seconds : float
        Timeout of each provider call.
    job_timeout_seconds : float, optional
        Overall deadline for the fan-out; None waits for every call.
    max_concurrency : int
        Maximum simultaneous provider calls.
    """

    def __init__(
        self,
        audit: AuditLog,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        provider_timeout_seconds: float = 10.0,
        job_timeout_seconds: float | None = None,
        max_concurrency: int = 10,
    ) -> None:
        self.audit = audit
        self.transport = transport
        self.provider_timeout_seconds = provider_timeout_seconds
        self.job_timeout_seconds = job_timeout_seconds
        self.max_concurrency = max_concurrency

    # ── Entry points ─────────────────────────────────────────────────

    def translate(
        self,
        job: TranslationJob,
        providers: Sequence[ProviderDescriptor],
    ) -> Result[ConsensusOutcome]:
        """Blocking wrapper around :meth:`translate_async`.

        Runs on a private event loop; when the caller already has a running
        loop the job is run on a worker thread instead.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.translate_async(job, providers))

        with ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, self.translate_async(job, providers)).result()

    async def translate_async(
        self,
        job: TranslationJob,
        providers: Sequence[ProviderDescriptor],
    ) -> Result[ConsensusOutcome]:
        providers = list(providers)
        if not providers:
            logger.error("consensus.no_providers", job_id=job.job_id)
            return Err(NoProvidersConfiguredError().with_context(job_id=job.job_id))

        started = time.perf_counter()
        logger.info(
            "consensus.start",
            job_id=job.job_id,
            providers=len(providers),
            source_locale=job.source_locale,
            target_locale=job.target_locale,
            max_concurrency=self.max_concurrency,
        )

        recorded = await self._fan_out(job, providers)
        results = sorted(recorded, key=lambda r: r.position)

        final_text, agreement = select_consensus([r.text for r in results if r.succeeded])
        outcome = ConsensusOutcome(
            job_id=job.job_id,
            final_text=final_text,
            agreement=agreement,
            results=results,
        )
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        if final_text is None:
            logger.error(
                "consensus.all_failed",
                job_id=job.job_id,
                attempted=len(providers),
                recorded=len(results),
                duration_ms=duration_ms,
            )
            error = AllProvidersFailedError(attempted=len(providers), outcome=outcome)
            return Err(error.with_context(job_id=job.job_id))

        logger.info(
            "consensus.selected",
            job_id=job.job_id,
            agreement=agreement,
            succeeded=outcome.succeeded,
            failed=outcome.failed,
            duration_ms=duration_ms,
        )
        return Ok(outcome)

    # ── Fan-out ──────────────────────────────────────────────────────

    async def _fan_out(
        self,
        job: TranslationJob,
        providers: list[ProviderDescriptor],
    ) -> list[ProviderResult]:
        sem = asyncio.Semaphore(self.max_concurrency)
        recorded: list[ProviderResult] = []

        async with httpx.AsyncClient(
            transport=self.transport,
            timeout=self.provider_timeout_seconds,
        ) as client:

            async def _run_one(position: int, provider: ProviderDescriptor) -> None:
                async with sem:
                    result = await call_provider(
                        client, provider, job, position, self.provider_timeout_seconds
                    )
                # no await between the call and the append: a cancelled
                # task is either fully recorded or absent
                self.audit.append(job, result)
                recorded.append(result)

            tasks = [
                asyncio.create_task(_run_one(position, provider))
                for position, provider in enumerate(providers)
            ]
            try:
                done, pending = await asyncio.wait(tasks, timeout=self.job_timeout_seconds)
                if pending:
                    logger.warning(
                        "consensus.deadline_exceeded",
                        job_id=job.job_id,
                        job_timeout_seconds=self.job_timeout_seconds,
                        completed=len(done),
                        cancelled=len(pending),
                    )
                for task in done:
                    task.result()
            finally:
                for task in tasks:
                    if not task.done():
                        task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)

        return recorded


__all__ = ["ConsensusEngine"]
