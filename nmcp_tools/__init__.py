"""Notion MCP Server Tool System.

Tool contract, registry, argument validation, rate-limited execution and
dispatch.
"""

from nmcp_tools.base import TextContent, ToolDescriptor, ToolFamily, ToolMetadata, ToolResponse
from nmcp_tools.registry import ToolRegistry

__all__ = [
    "TextContent",
    "ToolDescriptor",
    "ToolFamily",
    "ToolMetadata",
    "ToolResponse",
    "ToolRegistry",
]
