"""Typed payload contracts for the manifest operations.

Payloads are validated before they leave the service layer, so a renamed
key fails in tests instead of silently changing what a tool returns.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    return model_cls.model_validate(data).model_dump(mode="json")


class SummaryRow(BaseModel):
    type_name: str
    member_count: int
    sample_members: list[str]


class ManifestSummaryData(BaseModel):
    """Payload for ``ManifestService.summary``."""

    path: str
    version: str
    total_types: int
    total_items: int
    types: list[SummaryRow]
    report: str


class ManifestFilterData(BaseModel):
    """Payload for ``ManifestService.filter``."""

    path: str
    output_path: str | None
    included: list[str]
    missing: list[str]
    total_items: int
    max_members_per_type: int
    report: str


class TruncatedType(BaseModel):
    name: str
    original_count: int
    kept_count: int


class ManifestGenerateData(BaseModel):
    """Payload for ``ManifestService.generate``."""

    path: str
    target_org: str
    metadata_types: list[str]
    max_members: int
    total_types: int
    total_items: int
    modified: bool
    truncated: list[TruncatedType]
    report: str


class ManifestRetrieveData(BaseModel):
    """Payload for ``ManifestService.retrieve``."""

    manifest_path: str
    project_config_created: bool
    result: Any = None
    report: str


class ApexRetrieveData(BaseModel):
    """Payload for ``ManifestService.retrieve_apex_classes``."""

    target_org: str
    manifest_path: str
    total_classes: int
    retrieved_classes: int
    max_classes: int
    result: Any = None
    report: str
