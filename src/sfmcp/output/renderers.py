"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from sfmcp.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from sfmcp.services.result import ServiceResult

# Columns beyond this are dropped from record tables; use --json for everything.
_MAX_RECORD_COLUMNS = 8


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        _render_warnings(result, console)
    else:
        _render_error(result, console)
    if verbose and result.meta and "telemetry" in result.meta:
        _render_telemetry(result.meta["telemetry"], console)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: the produced path where there is one, else OK/ERROR."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    for key in ("output_path", "manifest_path", "path"):
        if key in result.data:
            value = result.data[key]
            return str(value) if value is not None else f"OK: {result.op}"
    return f"OK: {result.op}"


# ── Renderers ─────────────────────────────────────────────────────────


def _render_manifest_summary(result: ServiceResult, console: Console) -> None:
    data = result.data
    table = Table(title=Text(f"Manifest Summary ({data['path']})"), title_justify="left")
    table.add_column("Type", style="sf.type")
    table.add_column("Members", justify="right", style="sf.count")
    table.add_column("Samples")
    for row in data["types"]:
        table.add_row(
            Text(row["type_name"]),
            str(row["member_count"]),
            Text(", ".join(row["sample_members"])),
        )
    console.print(table)
    console.print(
        f"[sf.key]version[/] {data['version']}  "
        f"[sf.key]types[/] {data['total_types']}  "
        f"[sf.key]items[/] {data['total_items']}"
    )


def _render_report(result: ServiceResult, console: Console) -> None:
    console.print(Text.assemble(("OK", "sf.ok"), " ", (result.op, "sf.op")))
    console.print(Text(result.data["report"]))


def _render_records(result: ServiceResult, console: Console) -> None:
    records: list[dict[str, Any]] = result.data.get("records", [])
    header = Text.assemble(("OK", "sf.ok"), " ", (result.op, "sf.op"))
    header.append(f"  {len(records)} records")
    console.print(header)
    if not records:
        return
    columns = [key for key in records[0] if key != "attributes"][:_MAX_RECORD_COLUMNS]
    table = Table()
    for column in columns:
        table.add_column(column)
    for record in records:
        table.add_row(*(Text(_cell(record.get(column))) for column in columns))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console) -> None:
    console.print(Text.assemble(("OK", "sf.ok"), " ", (result.op, "sf.op")))
    for key, value in result.data.items():
        line = Text("  ")
        line.append(f"{key}: ", style="sf.key")
        line.append(_cell(value))
        console.print(line)


def _render_warnings(result: ServiceResult, console: Console) -> None:
    for warning in result.warnings:
        console.print(Text.assemble(("WARN", "sf.warning"), f" {warning}"))


def _render_error(result: ServiceResult, console: Console) -> None:
    msg = result.error.message if result.error else "Unknown error"
    code = f" [{result.error.code}]" if result.error else ""
    console.print(Text.assemble(("ERROR", "sf.error"), f" {result.op}{code} — {msg}"))


def _render_telemetry(span: dict[str, Any], console: Console) -> None:
    tree = Tree(f"{span['name']} {span['duration_ms']}ms")
    _add_span_children(tree, span)
    console.print(tree)


def _add_span_children(node: Tree, span: dict[str, Any]) -> None:
    for child in span.get("children", []):
        _add_span_children(node.add(f"{child['name']} {child['duration_ms']}ms"), child)


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return "" if value is None else str(value)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "manifest_summary": _render_manifest_summary,
    "manifest_filter": _render_report,
    "manifest_generate": _render_report,
    "manifest_retrieve": _render_report,
    "retrieve_apex_classes": _render_report,
    "data_query": _render_records,
}
