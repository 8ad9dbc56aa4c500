"""Tests for the declared runtime dependencies."""

from __future__ import annotations

import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def _dependencies() -> list[str]:
    data = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))
    return data["project"]["dependencies"]


class TestDependencies:
    def test_mcp_held_below_next_major(self) -> None:
        assert "mcp>=1.8,<2" in _dependencies()

    def test_anyio_declared(self) -> None:
        assert any(dep.startswith("anyio") for dep in _dependencies())
