"""
translate-spine - event dispatch and multi-provider translation consensus.

A host event on a translation snippet is routed by the dispatch engine to
the translation handler, which fans the text out to every configured
provider, records each answer and writes back the majority result.

Packages:
- translate_spine.core: errors, Result, logging, settings, store port
- translate_spine.framework: signals, registration table, dispatcher
- translate_spine.providers: provider descriptors, registries, HTTP calls
- translate_spine.consensus: fan-out engine, audit log, selection rule
- translate_spine.translation: the snippet handler and locale lookup
- translate_spine.store: in-memory record store
"""

__version__ = "0.1.0"
