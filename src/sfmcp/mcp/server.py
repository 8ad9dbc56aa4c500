"""FastMCP server setup.

Transport: stdio by default; sse and streamable HTTP optional. Logs go to
stderr so they never corrupt the stdio channel.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from sfmcp.infrastructure.project import Project
from sfmcp.mcp.tools import register_tools

__all__ = ["create_server"]


def create_server(
    project: Project,
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> FastMCP:
    """Create the MCP server and register every tool against *project*.

    *host* and *port* apply to the HTTP transports only.
    """
    server = FastMCP("sfmcp", host=host, port=port)
    register_tools(server, project)
    return server
