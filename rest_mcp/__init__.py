"""MCP server for making REST API requests."""

__version__ = "1.0.0"
