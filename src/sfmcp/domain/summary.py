"""Manifest summarizer — counts and samples, never the full member list.

The summary is what an LLM sees first, so it is bounded: at most
``SAMPLE_SIZE`` member names per type regardless of the type's size.
"""

from __future__ import annotations

from pydantic import BaseModel

from sfmcp.domain.manifest import ManifestDocument

SAMPLE_SIZE = 3


class SummaryItem(BaseModel):
    """Condensed view of one type entry."""

    model_config = {"frozen": True}

    type_name: str
    member_count: int
    sample_members: tuple[str, ...] = ()


class ManifestSummary(BaseModel):
    """Per-type summary items plus document totals."""

    model_config = {"frozen": True}

    items: tuple[SummaryItem, ...] = ()
    total_types: int = 0
    total_items: int = 0


def summarize_manifest(doc: ManifestDocument) -> ManifestSummary:
    """Summarize *doc* in document order."""
    items = tuple(
        SummaryItem(
            type_name=entry.name,
            member_count=entry.member_count,
            sample_members=entry.members[:SAMPLE_SIZE],
        )
        for entry in doc.types
    )
    return ManifestSummary(
        items=items,
        total_types=len(items),
        total_items=sum(item.member_count for item in items),
    )


def render_summary_report(summary: ManifestSummary, source: str) -> str:
    """Render the plain-text report returned to tool callers."""
    lines = [
        f"Manifest Summary ({source})",
        "",
        f"Total Metadata Types: {summary.total_types}",
        f"Total Items: {summary.total_items}",
        "",
    ]
    for item in summary.items:
        line = f"{item.type_name}: {item.member_count} items"
        if item.sample_members:
            line += f" (samples: {', '.join(item.sample_members)})"
        lines.append(line)
    lines.append("")
    lines.append("Use filter_manifest with specific metadata types to avoid quota issues.")
    return "\n".join(lines)
