"""Subcommand modules for sfmcp.

register_commands() uses deferred imports to keep ``sfmcp --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the five command groups and the ``serve`` command."""
    from sfmcp.commands.apex import apex
    from sfmcp.commands.data import data
    from sfmcp.commands.manifest import manifest
    from sfmcp.commands.org import org
    from sfmcp.commands.serve import serve
    from sfmcp.commands.source import source

    cli.add_command(manifest)
    cli.add_command(org)
    cli.add_command(data)
    cli.add_command(source)
    cli.add_command(apex)
    cli.add_command(serve)
