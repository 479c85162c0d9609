"""
CLI: ``translate-spine dispatch`` — run one signal against a store fixture.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from translate_spine.bootstrap import create_dispatch_engine
from translate_spine.cli.utils import fail, load_mapping, load_store, output_data
from translate_spine.consensus.audit import AUDIT_RECORD_TYPE
from translate_spine.core.errors import TranslateSpineError
from translate_spine.core.result import Err, Ok
from translate_spine.core.settings import get_settings
from translate_spine.framework.signals import ExecutionSignal
from translate_spine.store.memory import InMemoryEntityStore


def dispatch_command(
    signal_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Signal file (YAML/JSON)"),
    store_file: Path = typer.Option(..., "--store", "-s", exists=True, dir_okay=False, help="Store fixture"),
    providers_file: Path | None = typer.Option(
        None, "--providers", "-p", exists=True, dir_okay=False, help="Static providers file"
    ),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Dispatch one execution signal and show what was written."""
    settings = get_settings()
    if providers_file is not None:
        settings = settings.model_copy(update={"providers_file": providers_file})

    try:
        store = load_store(store_file)
        signal = ExecutionSignal.from_dict(load_mapping(signal_file))
        engine = create_dispatch_engine(store, settings)
    except (TranslateSpineError, KeyError, ValueError) as e:
        fail(e)

    match engine.execute(signal):
        case Ok():
            updates = [
                {"record_type": op.record_type, "record_id": op.record_id, **op.fields}
                for op in store.updates
            ]
            audit_rows = [op for op in store.operations if op.record_type == AUDIT_RECORD_TYPE]
            output_data(
                {
                    "status": "completed",
                    "correlation_id": signal.correlation_id,
                    "updates": updates,
                    "audit_rows": len(audit_rows),
                    "record": _subject_fields(store, signal),
                },
                as_json=json_out,
                title="Dispatch",
            )
        case Err(error) if json_out and isinstance(error, TranslateSpineError):
            report = {"status": "failed", "correlation_id": signal.correlation_id, "error": error.to_dict()}
            outcome = getattr(error.cause, "outcome", None)
            if outcome is not None:
                report["providers"] = outcome.to_dict()["results"]
            output_data(report, as_json=True)
            raise typer.Exit(code=1)
        case Err(error):
            fail(error)


def _subject_fields(store: InMemoryEntityStore, signal: ExecutionSignal) -> dict[str, Any] | None:
    subject = signal.payload.subject_ref()
    record = store.get_record(subject) if subject is not None else None
    return record.fields if record is not None else None
