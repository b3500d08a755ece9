"""Notion adapter for the MCP server.

Exposes Notion as four tool families:
- Pages: create, get, update, archive
- Databases: query, create/update entries, describe schema
- Blocks: append, list children, update, delete
- Search: full-text search and title search

Usage:
    from nmcp_tools.adapters.notion import NotionClientWrapper, build_notion_families
    from nmcp_tools.registry import ToolRegistry

    client = NotionClientWrapper(api_key="secret_...")
    registry = ToolRegistry(build_notion_families(client))
"""

from .client import NotionClientWrapper
from .exceptions import (
    NotionAdapterError,
    NotionAuthError,
    NotionRateLimitError,
    NotionResourceNotFoundError,
    NotionTimeoutError,
    NotionValidationError,
)
from .tools import (
    NotionBlockTools,
    NotionDatabaseTools,
    NotionPageTools,
    NotionSearchTools,
)

__all__ = [
    # Client
    "NotionClientWrapper",
    # Exceptions
    "NotionAdapterError",
    "NotionAuthError",
    "NotionRateLimitError",
    "NotionResourceNotFoundError",
    "NotionTimeoutError",
    "NotionValidationError",
    # Tool families
    "NotionPageTools",
    "NotionDatabaseTools",
    "NotionBlockTools",
    "NotionSearchTools",
    "build_notion_families",
]


def build_notion_families(client: NotionClientWrapper) -> list:
    """Build the Notion tool families in listing order.

    Args:
        client: Shared Notion client, lent to every family

    Returns:
        Page, database, block and search families, in that order
    """
    return [
        NotionPageTools(client),
        NotionDatabaseTools(client),
        NotionBlockTools(client),
        NotionSearchTools(client),
    ]
