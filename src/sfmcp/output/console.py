"""Rich Console factory and theme for sfmcp output.

Consoles render into a StringIO buffer so every renderer keeps a
``-> str`` contract. In non-TTY environments (tests, pipes) Rich drops
color codes automatically.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SFMCP_THEME = Theme(
    {
        "sf.ok": "bold green",
        "sf.error": "bold red",
        "sf.warning": "bold yellow",
        "sf.op": "bold cyan",
        "sf.key": "dim",
        "sf.type": "bold blue",
        "sf.count": "magenta",
        "sf.path": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SFMCP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
