"""Manifest document model — an immutable in-memory ``package.xml``.

Documents are never mutated in place. The filter engine derives new
documents from old ones; see :mod:`sfmcp.domain.filtering`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# Namespace required on the <Package> root by the Metadata API.
METADATA_NAMESPACE = "http://soap.sforce.com/2006/04/metadata"


class TypeEntry(BaseModel):
    """One ``<types>`` block: a metadata type name and its members.

    Members are stored exactly as written to package.xml, so blank or
    whitespace-padded members are rejected.
    """

    model_config = {"frozen": True}

    name: str
    members: tuple[str, ...] = ()

    @field_validator("members")
    @classmethod
    def _members_trimmed(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for member in value:
            if not member or member != member.strip():
                msg = f"member {member!r} must be non-empty without surrounding whitespace"
                raise ValueError(msg)
        return value

    @property
    def member_count(self) -> int:
        return len(self.members)


class ManifestDocument(BaseModel):
    """A package descriptor: ordered type entries plus an API version.

    Type names are assumed unique within a document. Parsing does not
    enforce it; :meth:`get` returns the first match.
    """

    model_config = {"frozen": True}

    version: str
    types: tuple[TypeEntry, ...] = Field(default_factory=tuple)

    @field_validator("version")
    @classmethod
    def _version_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "version must be non-empty"
            raise ValueError(msg)
        return value

    @property
    def type_names(self) -> list[str]:
        return [entry.name for entry in self.types]

    @property
    def total_members(self) -> int:
        return sum(entry.member_count for entry in self.types)

    def get(self, name: str) -> TypeEntry | None:
        """Return the entry named *name*, or None."""
        for entry in self.types:
            if entry.name == name:
                return entry
        return None
