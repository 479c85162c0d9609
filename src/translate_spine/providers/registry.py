"""Provider registry — the ordered list of providers a job may call.

Two sources, same contract:

- :class:`StoreProviderRegistry` reads active ``translation_provider``
  records from the record store on every call and keeps no state of its own.
- :class:`StaticProviderRegistry` holds descriptors loaded once at startup
  (typically from a YAML file).

Listing order is the registry order the consensus tie-breaks rely on.
Descriptors missing a required field, and store records that do not parse
into a descriptor, are skipped with a warning, never raised.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from translate_spine.core.logging import get_logger
from translate_spine.core.protocols import EntityStore
from translate_spine.providers.config import load_providers_file
from translate_spine.providers.models import ProviderDescriptor

logger = get_logger(__name__)

PROVIDER_RECORD_TYPE = "translation_provider"

#: Host state code of an active record.
ACTIVE_STATE = 0


class ProviderRegistry(ABC):
    """Base registry: subclasses supply descriptors, eligibility filtering lives here."""

    @abstractmethod
    def all_providers(self) -> list[ProviderDescriptor]:
        """Every configured descriptor, eligible or not, in registry order."""

    def list_eligible_providers(self) -> list[ProviderDescriptor]:
        eligible = []
        for provider in self.all_providers():
            missing = provider.missing_fields()
            if missing:
                logger.warning(
                    "provider.skipped",
                    provider_id=provider.id,
                    missing_fields=missing,
                )
                continue
            eligible.append(provider)
        return eligible


class StoreProviderRegistry(ProviderRegistry):
    """Reads active provider records from the record store."""

    def __init__(self, store: EntityStore, record_type: str = PROVIDER_RECORD_TYPE) -> None:
        self.store = store
        self.record_type = record_type

    def all_providers(self) -> list[ProviderDescriptor]:
        providers = []
        for record in self.store.query_records(self.record_type, statecode=ACTIVE_STATE):
            try:
                providers.append(ProviderDescriptor.from_record(record))
            except ValueError as e:
                logger.warning("provider.skipped", provider_id=record.id, error_message=str(e))
        return providers


class StaticProviderRegistry(ProviderRegistry):
    """Fixed descriptors, loaded once."""

    def __init__(self, providers: Iterable[ProviderDescriptor]) -> None:
        self._providers = tuple(providers)

    @classmethod
    def from_file(cls, path: Path) -> StaticProviderRegistry:
        providers = load_providers_file(path)
        logger.info("provider.file_loaded", path=str(path), providers=len(providers))
        return cls(providers)

    def all_providers(self) -> list[ProviderDescriptor]:
        return list(self._providers)


__all__ = [
    "PROVIDER_RECORD_TYPE",
    "ACTIVE_STATE",
    "ProviderRegistry",
    "StoreProviderRegistry",
    "StaticProviderRegistry",
]
