"""
Root Typer application for the translate-spine CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from translate_spine.core.logging import configure_logging
from translate_spine.core.settings import get_settings

app = Typer(
    name="translate-spine",
    help="translate-spine — event dispatch and multi-provider translation consensus.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("translate-spine")
        except PackageNotFoundError:
            from translate_spine import __version__ as v
        typer.echo(f"translate-spine {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Override TRANSLATE_SPINE_LOG_LEVEL."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON log lines on stderr."),
) -> None:
    """translate-spine CLI — dispatch signals, inspect providers, try the consensus rule."""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_format=json_logs or settings.log_format == "json",
        service=settings.service_name,
        cache_loggers=settings.log_cache_loggers,
    )


# ── Sub-command registration ─────────────────────────────────────────────

from translate_spine.cli.consensus import app as consensus_app  # noqa: E402
from translate_spine.cli.dispatch import dispatch_command  # noqa: E402
from translate_spine.cli.providers import app as providers_app  # noqa: E402

app.command("dispatch")(dispatch_command)
app.add_typer(providers_app, name="providers", help="Translation provider registry.")
app.add_typer(consensus_app, name="consensus", help="Consensus selection rule.")
