"""Record store implementations."""

from translate_spine.store.memory import InMemoryEntityStore, StoreOperation

__all__ = ["InMemoryEntityStore", "StoreOperation"]
