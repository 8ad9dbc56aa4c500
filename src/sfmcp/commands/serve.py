"""serve — start the MCP server."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sfmcp.commands._base import SfCommand

if TYPE_CHECKING:
    from sfmcp.commands._context import AppContext


@click.command(
    cls=SfCommand,
    examples="""\
  # stdio transport (default), as launched by an MCP client
  sfmcp serve

  # Streamable HTTP on a custom address
  sfmcp serve --transport streamable-http --host 0.0.0.0 --port 9000""",
)
@click.option(
    "--transport",
    default=None,
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="MCP transport protocol (default from [mcp] config).",
)
@click.option("--host", default=None, help="Bind address (HTTP transports only).")
@click.option("--port", default=None, type=int, help="Listen port (HTTP transports only).")
@click.pass_obj
def serve(app: AppContext, transport: str | None, host: str | None, port: int | None) -> None:
    """Start the MCP tool server."""
    from sfmcp.mcp.server import create_server

    cfg = app.settings.mcp
    server = create_server(app.project, host=host or cfg.host, port=port or cfg.port)
    server.run(transport=transport or cfg.transport)
