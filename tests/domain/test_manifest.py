"""Tests for the manifest document model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sfmcp.domain.manifest import ManifestDocument, TypeEntry


def _doc() -> ManifestDocument:
    return ManifestDocument(
        version="59.0",
        types=(
            TypeEntry(name="ApexClass", members=("A", "B")),
            TypeEntry(name="ApexTrigger"),
        ),
    )


class TestTypeEntry:
    def test_members_default_empty(self) -> None:
        assert TypeEntry(name="Flow").members == ()
        assert TypeEntry(name="Flow").member_count == 0

    def test_frozen(self) -> None:
        entry = TypeEntry(name="Flow", members=("X",))
        with pytest.raises(ValidationError):
            entry.name = "Other"  # type: ignore[misc]

    def test_list_members_coerced_to_tuple(self) -> None:
        entry = TypeEntry(name="Flow", members=["X", "Y"])  # type: ignore[arg-type]
        assert entry.members == ("X", "Y")

    @pytest.mark.parametrize("member", ["", " X", "X ", "\tX"])
    def test_blank_or_padded_member_rejected(self, member: str) -> None:
        with pytest.raises(ValidationError, match="surrounding whitespace"):
            TypeEntry(name="Flow", members=("A", member))

    def test_inner_whitespace_allowed(self) -> None:
        assert TypeEntry(name="Layout", members=("Account-Account Layout",)).member_count == 1


class TestManifestDocument:
    def test_type_names_in_order(self) -> None:
        assert _doc().type_names == ["ApexClass", "ApexTrigger"]

    def test_total_members(self) -> None:
        assert _doc().total_members == 2

    def test_get(self) -> None:
        doc = _doc()
        entry = doc.get("ApexClass")
        assert entry is not None
        assert entry.members == ("A", "B")
        assert doc.get("Layout") is None

    def test_blank_version_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ManifestDocument(version="  ")

    def test_equality_is_structural(self) -> None:
        assert _doc() == _doc()
