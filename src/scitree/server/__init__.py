"""MCP server exposing shared stars."""

from scitree.server.mcp_server import create_mcp_server

__all__ = ["create_mcp_server"]
