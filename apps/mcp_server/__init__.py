"""
Notion MCP Server Application.

Serves the Notion tool families over the Model Context Protocol (stdio).
"""

from apps.mcp_server.server import create_server

__all__ = ["create_server"]
