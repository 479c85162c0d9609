"""Provider descriptors — how to reach and shape a request for one translation back-end."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from translate_spine.core.models import Record


class HttpVerb(str, Enum):
    """Request verb. The host stores it as an option-set value (1 = GET, 2 = POST)."""

    GET = "GET"
    POST = "POST"

    @classmethod
    def parse(cls, value: Any) -> HttpVerb:
        if isinstance(value, cls):
            return value
        if isinstance(value, int) or (isinstance(value, str) and value.isdigit()):
            codes = {1: cls.GET, 2: cls.POST}
            if int(value) not in codes:
                raise ValueError(f"Unknown request type code {value!r}")
            return codes[int(value)]
        return cls(str(value).upper())


class AuthPlacement(str, Enum):
    """Where the API key goes."""

    HEADER = "header"
    QUERY = "query"


#: Fields that must be non-empty for a provider to be called.
REQUIRED_FIELDS = (
    "endpoint_url",
    "key_name",
    "key_secret",
    "text_param",
    "source_lang_param",
    "target_lang_param",
)


@dataclass(frozen=True)
class ProviderDescriptor:
    """
    One configured translation provider.

    ``text_param``, ``source_lang_param`` and ``target_lang_param`` are the
    names the provider expects for the text and the two locale codes, as
    query parameters (GET) or JSON body keys (POST).
    """

    id: str
    endpoint_url: str
    key_name: str
    key_secret: str = field(repr=False)
    text_param: str
    source_lang_param: str
    target_lang_param: str
    http_verb: HttpVerb = HttpVerb.POST
    auth_placement: AuthPlacement = AuthPlacement.HEADER
    name: str | None = None

    @property
    def label(self) -> str:
        return self.name or self.id

    def missing_fields(self) -> list[str]:
        """Names of required fields that are empty."""
        return [f for f in REQUIRED_FIELDS if not str(getattr(self, f) or "").strip()]

    @property
    def is_eligible(self) -> bool:
        return not self.missing_fields()

    @classmethod
    def from_record(cls, record: Record) -> ProviderDescriptor:
        """Map a ``translation_provider`` store record to a descriptor."""
        pass_as_header = record.get("pass_key_as_header")

        def text(field_name: str) -> str:
            value = record.get(field_name)
            return "" if value is None else str(value)

        return cls(
            id=record.id,
            name=text("name") or None,
            endpoint_url=text("url"),
            http_verb=HttpVerb.parse(record.get("request_type") or HttpVerb.POST),
            auth_placement=AuthPlacement.HEADER if pass_as_header else AuthPlacement.QUERY,
            key_name=text("client_key_name"),
            key_secret=text("client_key"),
            text_param=text("parameter_text_key"),
            source_lang_param=text("parameter_source_key"),
            target_lang_param=text("parameter_destination_key"),
        )


__all__ = ["HttpVerb", "AuthPlacement", "REQUIRED_FIELDS", "ProviderDescriptor"]
