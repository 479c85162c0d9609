"""Fan-out to providers, audit of every answer and majority selection.

Modules:
    models.py     TranslationJob, ProviderResult, ConsensusOutcome
    selection.py  select_consensus() majority rule
    audit.py      AuditLog, append-only provider result rows
    engine.py     ConsensusEngine, asyncio fan-out plus vote
"""
