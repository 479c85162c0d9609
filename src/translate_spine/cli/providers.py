"""
CLI: ``translate-spine providers`` — inspect configured translation providers.
"""

from __future__ import annotations

from pathlib import Path

import typer

from translate_spine.cli.utils import err_console, fail, load_store, output_data
from translate_spine.core.errors import TranslateSpineError
from translate_spine.providers.registry import (
    ProviderRegistry,
    StaticProviderRegistry,
    StoreProviderRegistry,
)

app = typer.Typer(no_args_is_help=True)


def _registry(store_file: Path | None, providers_file: Path | None) -> ProviderRegistry:
    if providers_file is not None:
        return StaticProviderRegistry.from_file(providers_file)
    if store_file is not None:
        return StoreProviderRegistry(load_store(store_file))
    err_console.print("[bold red]Error[/bold red]: pass --store or --providers")
    raise typer.Exit(code=2)


@app.command("list")
def list_providers(
    store_file: Path | None = typer.Option(None, "--store", "-s", exists=True, dir_okay=False),
    providers_file: Path | None = typer.Option(None, "--providers", "-p", exists=True, dir_okay=False),
    show_all: bool = typer.Option(False, "--all", "-a", help="Include ineligible providers"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List providers in registry order."""
    try:
        registry = _registry(store_file, providers_file)
        providers = registry.all_providers() if show_all else registry.list_eligible_providers()
    except TranslateSpineError as e:
        fail(e)

    rows = [
        {
            "position": position,
            "id": p.id,
            "name": p.name or "",
            "verb": p.http_verb.value,
            "auth": p.auth_placement.value,
            "endpoint": p.endpoint_url,
            "missing": ", ".join(p.missing_fields()),
        }
        for position, p in enumerate(providers)
    ]
    output_data(rows, as_json=json_out, title="Translation Providers")
