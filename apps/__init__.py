"""
Notion MCP Server Applications Package.

Contains:
- mcp_server: MCP server process (stdio transport)
"""

__version__ = "1.0.0"
