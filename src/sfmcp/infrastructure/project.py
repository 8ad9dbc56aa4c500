"""Project — the working context shared by every service.

Holds the frozen settings, the resolved project root, and the ``sf``
adapter bound to that root. Services receive one at construction time.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sfmcp.infrastructure.sf_cli import SfCli

if TYPE_CHECKING:
    from sfmcp.config.settings import SfmcpSettings


class Project:
    """Settings, root directory, and CLI adapter for one invocation."""

    def __init__(self, settings: SfmcpSettings, *, cli: SfCli | None = None) -> None:
        self.settings = settings
        self.root = settings.project_root
        self.cli = cli or SfCli(settings.sf.executable, cwd=self.root)

    def resolve(self, path: str | Path) -> Path:
        """Resolve *path* against the project root unless it is absolute."""
        p = Path(path).expanduser()
        return p if p.is_absolute() else self.root / p
