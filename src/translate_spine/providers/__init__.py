"""Translation provider descriptors, registries and HTTP calls."""

from translate_spine.providers.models import AuthPlacement, HttpVerb, ProviderDescriptor
from translate_spine.providers.registry import (
    ProviderRegistry,
    StaticProviderRegistry,
    StoreProviderRegistry,
)

__all__ = [
    "AuthPlacement",
    "HttpVerb",
    "ProviderDescriptor",
    "ProviderRegistry",
    "StaticProviderRegistry",
    "StoreProviderRegistry",
]
