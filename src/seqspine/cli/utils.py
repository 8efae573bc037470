"""
CLI utility helpers - output formatting and service construction.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from seqspine.core.errors import InvalidConfigError
from seqspine.core.settings import SeqSpineSettings, get_settings
from seqspine.ops.context import OperationContext
from seqspine.ops.result import OperationResult, PagedResult
from seqspine.sequencing.service import SequenceService

console = Console()
err_console = Console(stderr=True)


# ── Service helper ───────────────────────────────────────────────────────


def load_settings(database: str | None = None) -> SeqSpineSettings:
    """Process settings, with ``--database`` overriding ``database_url``."""
    try:
        settings = get_settings()
    except InvalidConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc.message}")
        raise typer.Exit(1) from exc
    if database:
        settings = settings.model_copy(update={"database_url": database})
    return settings


def make_context(
    database: str | None = None,
    *,
    dry_run: bool = False,
    provision: bool = False,
) -> tuple[OperationContext, SequenceService]:
    """Create an ``OperationContext`` + service pair for CLI commands.

    With *provision* the tables are created first if absent.
    """
    service = SequenceService.from_settings(load_settings(database))
    if provision:
        service.provision()
    ctx = OperationContext(service=service, caller="cli", dry_run=dry_run)
    return ctx, service


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def _fail(result: OperationResult[Any]) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = err.code if err else "ERROR"
    err_console.print(f"[bold red]Error[/bold red] ({code}): {msg}")
    raise typer.Exit(code=1)


def output_result(
    result: OperationResult[Any],
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult``; exit 1 on failure."""
    if not result.success:
        _fail(result)

    data = result.data

    if as_json:
        payload = [_to_dict(d) for d in data] if isinstance(data, list | tuple) else _to_dict(data)
        console.print_json(json.dumps(payload, default=str))
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(_to_dict(data), title=title)


def output_paged(
    result: PagedResult[Any],
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render a ``PagedResult`` with pagination info; exit 1 on failure."""
    if not result.success:
        _fail(result)

    items = result.data or []

    if as_json:
        payload = {
            "items": [_to_dict(d) for d in items],
            "total": result.total,
            "limit": result.limit,
            "offset": result.offset,
            "has_more": result.has_more,
        }
        console.print_json(json.dumps(payload, default=str))
        return

    if not items:
        console.print("[dim]No items.[/dim]")
        return

    _print_table(items, title=title)
    console.print(f"\n[dim]Showing {len(items)} of {result.total} (offset {result.offset})[/dim]")


def output_rows(rows: list[dict[str, Any]], *, as_json: bool = False, title: str = "") -> None:
    """Render plain rows that did not come from an operation."""
    if as_json:
        console.print_json(json.dumps(rows, default=str))
        return
    if not rows:
        console.print("[dim]No items.[/dim]")
        return
    _print_table(rows, title=title)


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(items: list[Any], *, title: str = "") -> None:
    first = _to_dict(items[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col, overflow="fold")
    for item in items:
        table.add_row(*(str(v) for v in _to_dict(item).values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {v}")
