"""Tests for typed payload contracts at the service boundary."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sfmcp.services.contracts import (
    ManifestFilterData,
    ManifestSummaryData,
    dump_validated,
)
from sfmcp.services.manifest import ManifestService


class TestDumpValidated:
    def test_normalizes_tuples(self) -> None:
        data = dump_validated(
            ManifestSummaryData,
            {
                "path": "p",
                "version": "59.0",
                "total_types": 1,
                "total_items": 1,
                "types": [{"type_name": "Flow", "member_count": 1, "sample_members": ("F",)}],
                "report": "r",
            },
        )
        assert data["types"][0]["sample_members"] == ["F"]

    def test_missing_key_fails(self) -> None:
        with pytest.raises(ValidationError):
            dump_validated(ManifestFilterData, {"path": "p"})


class TestPayloadContracts:
    def test_summary_payload_conforms(self, project) -> None:
        result = ManifestService(project).summary("manifest/package.xml")
        payload = ManifestSummaryData.model_validate(result.data)
        assert payload.total_types == 5

    def test_filter_payload_conforms(self, project) -> None:
        result = ManifestService(project).filter("manifest/package.xml", ["ApexClass"])
        payload = ManifestFilterData.model_validate(result.data)
        assert payload.included == ["ApexClass"]
