"""
CLI: ``seq-spine db`` - database management commands.
"""

from __future__ import annotations

import typer

from seqspine.cli.utils import make_context, output_result

app = typer.Typer(no_args_is_help=True)


@app.command()
def init(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL"),
    seed_counters: bool = typer.Option(
        False, "--seed-counters", help="Create a zero counter for every category"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without changes"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Create the counter and mapping tables (idempotent)."""
    from seqspine.ops.database import initialize_database
    from seqspine.ops.requests import DatabaseInitRequest

    ctx, service = make_context(database, dry_run=dry_run)
    try:
        result = initialize_database(ctx, DatabaseInitRequest(seed_counters=seed_counters))
    finally:
        service.dispose()
    output_result(result, as_json=json_out, title="Database Init")


@app.command()
def status(
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show row counts of the managed tables (-1 = not provisioned)."""
    from seqspine.ops.database import get_table_counts

    ctx, service = make_context(database)
    try:
        result = get_table_counts(ctx)
    finally:
        service.dispose()
    output_result(result, as_json=json_out, title="Table Counts")


@app.command()
def health(
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Check database connectivity."""
    from seqspine.ops.database import check_database_health

    ctx, service = make_context(database)
    try:
        result = check_database_health(ctx)
    finally:
        service.dispose()
    output_result(result, as_json=json_out, title="Database Health")
