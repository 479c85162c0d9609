"""Locale id → language code lookup through the record store."""

from __future__ import annotations

from typing import Any

from translate_spine.core.errors import LocaleNotFoundError
from translate_spine.core.logging import get_logger
from translate_spine.core.protocols import EntityStore

logger = get_logger(__name__)

LOCALE_RECORD_TYPE = "language_locale"


class LocaleResolver:
    """
    Resolves host locale ids (``1033``) to the language codes providers
    expect (``"en"``).

    A value that is already a code (a non-numeric string) is returned as is.
    An id with no catalogue entry raises :class:`LocaleNotFoundError`.
    """

    def __init__(self, store: EntityStore, record_type: str = LOCALE_RECORD_TYPE) -> None:
        self.store = store
        self.record_type = record_type

    def resolve(self, locale_id: Any) -> str:
        if isinstance(locale_id, str) and not locale_id.strip():
            raise LocaleNotFoundError(locale_id)
        if isinstance(locale_id, str) and not locale_id.strip().isdigit():
            return locale_id.strip()

        records = self.store.query_records(self.record_type, localeid=int(locale_id))
        for record in records:
            code = record.get("code")
            if code:
                return str(code)

        logger.error("locale.not_found", locale_id=locale_id, record_type=self.record_type)
        raise LocaleNotFoundError(locale_id)

    def resolve_pair(self, source_id: Any, target_id: Any) -> tuple[str, str]:
        return self.resolve(source_id), self.resolve(target_id)


__all__ = ["LOCALE_RECORD_TYPE", "LocaleResolver"]
