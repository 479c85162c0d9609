"""
CLI utility helpers — output formatting and fixture loading.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, NoReturn

import typer
import yaml
from rich.console import Console
from rich.table import Table

from translate_spine.core.errors import ConfigError, TranslateSpineError
from translate_spine.store.memory import InMemoryEntityStore

console = Console()
err_console = Console(stderr=True)


# ── Loading helpers ──────────────────────────────────────────────────────


def load_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML (or JSON) file that must hold a mapping."""
    try:
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot load {path}: {e}", cause=e) from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} does not contain a mapping")
    return data


def load_store(path: Path) -> InMemoryEntityStore:
    """Build an in-memory store from a fixture file."""
    return InMemoryEntityStore.from_dict(load_mapping(path))


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def fail(error: BaseException) -> NoReturn:
    """Print an error and exit with status 1."""
    if isinstance(error, TranslateSpineError):
        err_console.print(
            f"[bold red]Error[/bold red] ({type(error).__name__}, {error.category.value}): {error.message}"
        )
    else:
        err_console.print(f"[bold red]Error[/bold red] ({type(error).__name__}): {error}")
    raise typer.Exit(code=1)


def output_data(data: Any, *, as_json: bool = False, title: str = "") -> None:
    """Render a dict, a list of rows, or a single object."""
    if as_json:
        payload = [_to_dict(d) for d in data] if isinstance(data, list | tuple) else _to_dict(data)
        console.print_json(json.dumps(payload, default=str))
        return

    if isinstance(data, list | tuple):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(list(data), title=title)
    else:
        _print_dict(_to_dict(data), title=title)


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(items: list, *, title: str = "") -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    first = _to_dict(items[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col, overflow="fold")
    for item in items:
        d = _to_dict(item)
        table.add_row(*(str(v) for v in d.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {v}")
