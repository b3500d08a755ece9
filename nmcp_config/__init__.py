"""
Notion MCP Server Configuration Package.

Provides Pydantic Settings loaded from environment variables.
"""

from nmcp_config.settings import Settings

__all__ = ["Settings"]
