"""
Provider HTTP calls.

Request shape per provider:

- ``GET``: text and both locale codes as query parameters named by the
  provider's param keys; the API key as a header or as a query parameter
  named ``key_name``.
- ``POST``: JSON body holding only the three translation fields; the API
  key as a header or as a query parameter.

Every request sends ``Accept: application/json`` and
``Content-Type: application/json``. The raw response body is the
translated text.

:func:`call_provider` never raises for provider-side trouble: network
errors, timeouts, non-2xx statuses and empty bodies all become a failed
:class:`~translate_spine.consensus.models.ProviderResult` for that one
provider. The key secret never appears in logs or error messages.
"""

from __future__ import annotations

import asyncio
import time

import httpx

from translate_spine.consensus.models import ProviderResult, TranslationJob
from translate_spine.core.errors import (
    ErrorContext,
    ProviderError,
    ProviderHTTPError,
    ProviderTimeoutError,
)
from translate_spine.core.logging import get_logger
from translate_spine.core.result import Err, Ok, Result
from translate_spine.providers.models import AuthPlacement, HttpVerb, ProviderDescriptor

logger = get_logger(__name__)

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def translation_fields(provider: ProviderDescriptor, job: TranslationJob) -> dict[str, str]:
    """The three translation fields keyed by the provider's parameter names."""
    return {
        provider.text_param: job.source_text,
        provider.source_lang_param: job.source_locale,
        provider.target_lang_param: job.target_locale,
    }


def build_request(
    client: httpx.AsyncClient,
    provider: ProviderDescriptor,
    job: TranslationJob,
) -> httpx.Request:
    """Shape the outbound request for one provider."""
    headers = dict(JSON_HEADERS)
    params: dict[str, str] = {}

    if provider.auth_placement is AuthPlacement.HEADER:
        headers[provider.key_name] = provider.key_secret
    else:
        params[provider.key_name] = provider.key_secret

    if provider.http_verb is HttpVerb.GET:
        params.update(translation_fields(provider, job))

    # params= on build_request replaces the endpoint's own query string
    url = httpx.URL(provider.endpoint_url)
    if params:
        url = url.copy_merge_params(params)

    if provider.http_verb is HttpVerb.GET:
        return client.build_request("GET", url, headers=headers)
    return client.build_request("POST", url, headers=headers, json=translation_fields(provider, job))


async def call_provider(
    client: httpx.AsyncClient,
    provider: ProviderDescriptor,
    job: TranslationJob,
    position: int,
    timeout: float,
) -> ProviderResult:
    """
    Send exactly one request to ``provider`` and wrap the outcome.

    Args:
        client: Shared client for the job
        provider: Eligible provider descriptor
        job: The translation job
        position: Registry position of the provider
        timeout: Per-call timeout in seconds

    Returns:
        ProviderResult with ``Ok(text)`` or ``Err(ProviderError)``
    """
    started = time.perf_counter()
    http_status: int | None = None
    context = ErrorContext(job_id=job.job_id, provider_id=provider.id, url=provider.endpoint_url)
    outcome: Result[str]

    try:
        request = build_request(client, provider, job)
        response = await asyncio.wait_for(client.send(request), timeout=timeout)
        http_status = response.status_code
        context.http_status = http_status
        if not response.is_success:
            raise ProviderHTTPError(
                f"{provider.label} answered HTTP {http_status}",
                context=context,
            )
        text = response.text
        if not text.strip():
            raise ProviderHTTPError(f"{provider.label} returned an empty body", context=context)
        outcome = Ok(text)
    except ProviderError as e:
        outcome = Err(e)
    except (TimeoutError, httpx.TimeoutException) as e:
        outcome = Err(
            ProviderTimeoutError(
                f"{provider.label} did not answer within {timeout}s",
                context=context,
                cause=e,
            )
        )
    except httpx.HTTPError as e:
        outcome = Err(
            ProviderHTTPError(
                f"{provider.label} request failed: {type(e).__name__}",
                context=context,
                cause=e,
            )
        )
    except Exception as e:
        outcome = Err(
            ProviderError(
                f"{provider.label} call failed: {type(e).__name__}: {e}",
                context=context,
                cause=e,
            )
        )

    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    match outcome:
        case Ok(value):
            logger.debug(
                "provider.call_succeeded",
                job_id=job.job_id,
                provider_id=provider.id,
                http_status=http_status,
                chars=len(value),
                duration_ms=duration_ms,
            )
        case Err(error):
            logger.warning(
                "provider.call_failed",
                job_id=job.job_id,
                provider_id=provider.id,
                url=provider.endpoint_url,
                http_status=http_status,
                error_type=type(error).__name__,
                error_message=str(error),
                duration_ms=duration_ms,
            )

    return ProviderResult(
        provider_id=provider.id,
        provider_name=provider.name,
        outcome=outcome,
        position=position,
        duration_ms=duration_ms,
        http_status=http_status,
    )


__all__ = ["JSON_HEADERS", "translation_fields", "build_request", "call_provider"]
