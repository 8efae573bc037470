"""
Root Typer application for the seq-spine CLI.
"""

from __future__ import annotations

import sys

import typer
from typer import Typer

from seqspine import __version__
from seqspine.cli.db import app as db_app
from seqspine.cli.seq import app as seq_app
from seqspine.cli.serve import app as serve_app
from seqspine.core.logging import configure_logging

app = Typer(
    name="seq-spine",
    help="seq-spine - per-category sequential ids for published records.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"seq-spine {__version__}")
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
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log allocation events to stderr."),
) -> None:
    """seq-spine CLI - allocate, resolve and inspect sequence ids."""
    configure_logging(level="DEBUG" if verbose else "WARNING", json_format=False, stream=sys.stderr)


# ── Sub-command registration ─────────────────────────────────────────────

app.add_typer(db_app, name="db", help="Database operations.")
app.add_typer(seq_app, name="seq", help="Sequence allocation and lookups.")
app.add_typer(serve_app, name="serve", help="Start the API server.")
