"""
CLI: ``translate-spine consensus`` — apply the selection rule to ad-hoc texts.
"""

from __future__ import annotations

import typer

from translate_spine.cli.utils import err_console, output_data
from translate_spine.consensus.selection import select_consensus

app = typer.Typer(no_args_is_help=True)


@app.command("vote")
def vote(
    texts: list[str] = typer.Argument(..., help="Provider answers in registry order"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Pick the consensus text from answers given in registry order."""
    winner, votes = select_consensus(texts)
    if winner is None:
        err_console.print("[bold red]Error[/bold red]: no texts to vote on")
        raise typer.Exit(code=1)
    output_data(
        {"final_text": winner, "agreement": votes, "candidates": len(texts)},
        as_json=json_out,
        title="Consensus",
    )
