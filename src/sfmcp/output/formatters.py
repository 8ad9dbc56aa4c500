"""Output mode dispatch for ServiceResult.

The CLI renders results for humans (Rich), for scripts (``--quiet``), or
for machines (``--json``). MCP tools get a single text payload from
:func:`format_tool_text`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sfmcp.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from sfmcp.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for the CLI according to *settings*."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)


def format_tool_text(result: ServiceResult) -> str:
    """The text an MCP tool returns.

    Success: the operation's report when it has one, else the payload
    as indented JSON, followed by any warnings. Failure: one error line
    carrying the external message verbatim.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    report = result.data.get("report")
    text = report if isinstance(report, str) else json.dumps(result.data, indent=2, default=str)
    if result.warnings:
        text += "\n\nWarnings:\n" + "\n".join(f"- {w}" for w in result.warnings)
    return text
