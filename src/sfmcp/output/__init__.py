"""Output layer — Rich, quiet, JSON, and MCP text rendering of ServiceResult."""
