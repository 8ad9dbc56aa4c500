"""MCP interface — FastMCP server and tool definitions."""
