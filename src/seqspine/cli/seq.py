"""
CLI: ``seq-spine seq`` - lifecycle events, lookups and listings.
"""

from __future__ import annotations

import typer

from seqspine.cli.utils import make_context, output_paged, output_result, output_rows

app = typer.Typer(no_args_is_help=True)

_DATABASE = typer.Option(None, "--database", "-d", help="Database URL")
_JSON = typer.Option(False, "--json", help="JSON output")


@app.command()
def publish(
    permanent_id: int = typer.Argument(..., help="Stable id of the record"),
    category: str = typer.Argument(..., help="Record category"),
    parent_id: int = typer.Option(0, "--parent-id", help="0 for top-level records"),
    status: str = typer.Option("publish", "--status", help="Record status after the save"),
    database: str | None = _DATABASE,
    dry_run: bool = typer.Option(False, "--dry-run", help="Report without allocating"),
    json_out: bool = _JSON,
) -> None:
    """Deliver a publish event; allocates a sequence id if the record is eligible."""
    from seqspine.ops.requests import PublishRecordRequest
    from seqspine.ops.sequences import publish_record

    ctx, service = make_context(database, dry_run=dry_run, provision=True)
    try:
        result = publish_record(
            ctx,
            PublishRecordRequest(
                permanent_id=permanent_id,
                category=category,
                parent_id=parent_id,
                status=status,
            ),
        )
    finally:
        service.dispose()
    output_result(result, as_json=json_out, title="Publish")


@app.command()
def delete(
    permanent_id: int = typer.Argument(..., help="Stable id of the deleted record"),
    database: str | None = _DATABASE,
    dry_run: bool = typer.Option(False, "--dry-run"),
    json_out: bool = _JSON,
) -> None:
    """Deliver a delete event; the category counter is never decremented."""
    from seqspine.ops.requests import DeleteRecordRequest
    from seqspine.ops.sequences import delete_record

    ctx, service = make_context(database, dry_run=dry_run, provision=True)
    try:
        result = delete_record(ctx, DeleteRecordRequest(permanent_id=permanent_id))
    finally:
        service.dispose()
    output_result(result, as_json=json_out, title="Delete")


@app.command()
def resolve(
    category: str = typer.Argument(...),
    sequence_id: str = typer.Argument(..., help="Sequence id (malformed values are a miss)"),
    database: str | None = _DATABASE,
    json_out: bool = _JSON,
) -> None:
    """Find the record behind ``(category, sequence_id)``."""
    from seqspine.ops.requests import ResolveSequenceRequest
    from seqspine.ops.sequences import resolve_sequence

    ctx, service = make_context(database, provision=True)
    try:
        result = resolve_sequence(ctx, ResolveSequenceRequest(category=category, sequence_id=sequence_id))
    finally:
        service.dispose()
    output_result(result, as_json=json_out, title="Mapping")


@app.command()
def lookup(
    permanent_id: str = typer.Argument(...),
    database: str | None = _DATABASE,
    json_out: bool = _JSON,
) -> None:
    """Show the sequence id and category of a record."""
    from seqspine.ops.requests import LookupRecordRequest
    from seqspine.ops.sequences import lookup_record

    ctx, service = make_context(database, provision=True)
    try:
        result = lookup_record(ctx, LookupRecordRequest(permanent_id=permanent_id))
    finally:
        service.dispose()
    output_result(result, as_json=json_out, title="Mapping")


@app.command()
def route(
    path: str = typer.Argument(..., help="Public path, e.g. /product/12/"),
    database: str | None = _DATABASE,
    json_out: bool = _JSON,
) -> None:
    """Resolve a public path to its record."""
    from seqspine.ops.requests import ResolvePathRequest
    from seqspine.ops.sequences import resolve_path

    ctx, service = make_context(database, provision=True)
    try:
        result = resolve_path(ctx, ResolvePathRequest(path=path))
    finally:
        service.dispose()
    output_result(result, as_json=json_out, title="Route")


@app.command()
def permalink(
    permanent_id: str = typer.Argument(...),
    database: str | None = _DATABASE,
    json_out: bool = _JSON,
) -> None:
    """Print the public URL of a record."""
    from seqspine.ops.requests import PermalinkRequest
    from seqspine.ops.sequences import get_permalink

    ctx, service = make_context(database, provision=True)
    try:
        result = get_permalink(ctx, PermalinkRequest(permanent_id=permanent_id))
    finally:
        service.dispose()
    output_result(result, as_json=json_out, title="Permalink")


@app.command()
def counters(
    database: str | None = _DATABASE,
    json_out: bool = _JSON,
) -> None:
    """Show the counter of every configured category."""
    from seqspine.ops.sequences import list_counters

    ctx, service = make_context(database, provision=True)
    try:
        result = list_counters(ctx)
    finally:
        service.dispose()
    output_result(result, as_json=json_out, title="Counters")


@app.command()
def mappings(
    category: str = typer.Argument(...),
    limit: int = typer.Option(50, "--limit", "-n", min=1, max=500),
    offset: int = typer.Option(0, "--offset", min=0),
    database: str | None = _DATABASE,
    json_out: bool = _JSON,
) -> None:
    """List the mappings of a category by sequence id."""
    from seqspine.ops.requests import ListMappingsRequest
    from seqspine.ops.sequences import list_mappings

    ctx, service = make_context(database, provision=True)
    try:
        result = list_mappings(ctx, ListMappingsRequest(category=category, limit=limit, offset=offset))
    finally:
        service.dispose()
    output_paged(result, as_json=json_out, title=f"{category} mappings")


@app.command()
def rules(
    database: str | None = _DATABASE,
    json_out: bool = _JSON,
) -> None:
    """Show the rewrite rules a host router should register."""
    _ctx, service = make_context(database)
    try:
        rows = [rule.to_dict() for rule in service.rewrite_rules()]
    finally:
        service.dispose()
    output_rows(rows, as_json=json_out, title="Rewrite Rules")
