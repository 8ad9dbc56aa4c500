"""Manifest filter engine — name selection and per-type quotas.

Two modes, both pure:

- :func:`filter_manifest` keeps only the requested types and truncates
  each one to the quota.
- :func:`limit_manifest` (auto-limit) truncates every type of a freshly
  generated manifest and reports which ones lost members.

Truncation is always a stable prefix so a reviewed manifest can be
reproduced exactly. The quota is passed in by the caller on every call.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sfmcp.domain.errors import InvalidFilterSpec
from sfmcp.domain.manifest import ManifestDocument, TypeEntry

DEFAULT_MAX_MEMBERS_PER_TYPE = 500


def validate_quota(max_members_per_type: int) -> None:
    """Raise InvalidFilterSpec unless the quota is a positive integer."""
    if max_members_per_type <= 0:
        msg = f"max_members_per_type must be a positive integer, got {max_members_per_type}"
        raise InvalidFilterSpec(msg)


@dataclass(frozen=True)
class FilterSpec:
    """Which types to keep and how many members each may retain."""

    include_type_names: frozenset[str]
    max_members_per_type: int = DEFAULT_MAX_MEMBERS_PER_TYPE

    def __post_init__(self) -> None:
        validate_quota(self.max_members_per_type)

    @classmethod
    def of(
        cls,
        type_names: Iterable[str],
        max_members_per_type: int | None = None,
    ) -> FilterSpec:
        """Build a spec from any iterable; ``None`` quota means the default."""
        if max_members_per_type is None:
            max_members_per_type = DEFAULT_MAX_MEMBERS_PER_TYPE
        return cls(frozenset(type_names), max_members_per_type)


@dataclass(frozen=True)
class LimitedEntry:
    """Auto-limit outcome for one type entry."""

    name: str
    original_count: int
    kept_count: int

    @property
    def modified(self) -> bool:
        return self.kept_count < self.original_count


@dataclass(frozen=True)
class LimitResult:
    """Auto-limited document plus a per-entry truncation report."""

    document: ManifestDocument
    entries: tuple[LimitedEntry, ...]

    @property
    def modified(self) -> bool:
        return any(entry.modified for entry in self.entries)

    @property
    def truncated(self) -> list[LimitedEntry]:
        return [entry for entry in self.entries if entry.modified]


def _truncate(entry: TypeEntry, limit: int) -> TypeEntry:
    if entry.member_count <= limit:
        return entry
    return entry.model_copy(update={"members": entry.members[:limit]})


def filter_manifest(doc: ManifestDocument, spec: FilterSpec) -> ManifestDocument:
    """Derive a document holding only ``spec.include_type_names``.

    Matching entries keep their relative order and are truncated to
    ``spec.max_members_per_type``. Non-matching entries are dropped.
    Requested names absent from *doc* are ignored; use
    :func:`missing_type_names` to detect them.
    """
    kept = tuple(
        _truncate(entry, spec.max_members_per_type)
        for entry in doc.types
        if entry.name in spec.include_type_names
    )
    return ManifestDocument(version=doc.version, types=kept)


def limit_manifest(doc: ManifestDocument, max_members_per_type: int) -> LimitResult:
    """Truncate every entry of *doc* to *max_members_per_type* members.

    Raises:
        InvalidFilterSpec: *max_members_per_type* is not positive.
    """
    validate_quota(max_members_per_type)
    limited = tuple(_truncate(entry, max_members_per_type) for entry in doc.types)
    report = tuple(
        LimitedEntry(
            name=before.name,
            original_count=before.member_count,
            kept_count=after.member_count,
        )
        for before, after in zip(doc.types, limited, strict=True)
    )
    return LimitResult(
        document=ManifestDocument(version=doc.version, types=limited),
        entries=report,
    )


def missing_type_names(requested: Iterable[str], doc: ManifestDocument) -> list[str]:
    """Requested type names with no entry in *doc*, in request order."""
    present = set(doc.type_names)
    seen: set[str] = set()
    missing: list[str] = []
    for name in requested:
        if name not in present and name not in seen:
            missing.append(name)
            seen.add(name)
    return missing
