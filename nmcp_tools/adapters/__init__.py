"""Tool Adapters.

Available adapters:
- notion: Notion pages, databases, blocks and search exposed as MCP tools
"""

__all__ = ["notion"]
