"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, sfmcp.toml only holds overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, PositiveInt

from sfmcp.domain.filtering import DEFAULT_MAX_MEMBERS_PER_TYPE


class SfConfig(BaseModel):
    """[sf] section — the external CLI and project defaults."""

    model_config = {"frozen": True}

    executable: str = "sf"
    source_api_version: str = "59.0"
    login_url: str = "https://login.salesforce.com"


class ManifestConfig(BaseModel):
    """[manifest] section — output locations and per-type quotas."""

    model_config = {"frozen": True}

    output_dir: str = "manifest"
    retrieve_target_dir: str = "force-app/main/default"
    max_members_per_type: PositiveInt = DEFAULT_MAX_MEMBERS_PER_TYPE
    generate_max_members: PositiveInt = 1000
    apex_max_classes: PositiveInt = 100


class McpConfig(BaseModel):
    """[mcp] section."""

    model_config = {"frozen": True}

    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
