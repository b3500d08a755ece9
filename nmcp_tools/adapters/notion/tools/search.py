"""Notion Search Tools.

Search across the Notion workspace for pages and databases.
"""

from typing import Any

from nmcp_obs.logging import get_logger
from nmcp_tools.base import ToolDescriptor, ToolMetadata, ToolResponse
from nmcp_tools.errors import ToolRoutingError
from nmcp_tools.validation import validate_arguments
from nmcp_tools.adapters.notion.client import NotionClientWrapper
from nmcp_tools.adapters.notion.formatting import (
    blocks_preview,
    extract_database_title,
    extract_page_title,
)
from nmcp_tools.adapters.notion.schemas import SearchByTitleInput, SearchInput

logger = get_logger(__name__)

# Notion caps search page size at 100
TITLE_SEARCH_PAGE_SIZE = 100
PREVIEW_BLOCK_COUNT = 3


def _date(timestamp: str | None) -> str:
    """Date part of an ISO 8601 timestamp."""
    return (timestamp or "")[:10]


def _normalize_id(notion_id: str) -> str:
    return notion_id.replace("-", "").lower()


class NotionSearchTools:
    """Tool family for workspace search.

    Use Cases:
    - "Find all pages about Python"
    - "Search for customer database"
    - "Find the page titled 'Q3 Roadmap'"
    """

    family = "search"

    def __init__(self, notion: NotionClientWrapper):
        self.notion = notion
        self._handlers = {
            "notion_search": self._search,
            "notion_search_by_title": self._search_by_title,
        }

    def get_tools(self) -> list[ToolDescriptor]:
        return [
            ToolDescriptor.from_model(
                "notion_search",
                "Search for pages and databases in Notion",
                SearchInput,
                ToolMetadata(read_only=True, idempotent=True),
            ),
            ToolDescriptor.from_model(
                "notion_search_by_title",
                "Search for pages by exact or partial title match",
                SearchByTitleInput,
                ToolMetadata(read_only=True, idempotent=True),
            ),
        ]

    async def handle_tool(self, name: str, arguments: Any) -> ToolResponse:
        handler = self._handlers.get(name)
        if handler is None:
            raise ToolRoutingError(name)
        return await handler(arguments)

    async def _search(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(SearchInput, arguments)
        api = self.notion.client

        params: dict[str, Any] = {"page_size": validated.page_size}
        if validated.query:
            params["query"] = validated.query
        if validated.filter:
            params["filter"] = validated.filter.model_dump()
        if validated.sort:
            params["sort"] = validated.sort.model_dump()

        response = await self.notion.request(lambda: api.search(**params))
        results = response.get("results", [])

        text = "# Search Results\n\n"
        text += f"Found {len(results)} items"
        if validated.query:
            text += f' for "{validated.query}"'
        text += "\n\n"

        for item in results:
            if item.get("object") == "page":
                text += f"## 📄 Page: {extract_page_title(item)}\n"
                text += f"- **ID:** {item['id']}\n"
                text += f"- **URL:** {item.get('url', '')}\n"
                text += f"- **Created:** {_date(item.get('created_time'))}\n"
                text += f"- **Last edited:** {_date(item.get('last_edited_time'))}\n"
                parent = item.get("parent") or {}
                if parent.get("type") == "database_id":
                    text += f"- **In database:** {parent.get('database_id')}\n"
                text += "\n"
            elif item.get("object") == "database":
                text += f"## 🗄️ Database: {extract_database_title(item, 'Untitled Database')}\n"
                text += f"- **ID:** {item['id']}\n"
                text += f"- **URL:** {item.get('url', '')}\n"
                text += f"- **Created:** {_date(item.get('created_time'))}\n"
                text += f"- **Properties:** {len(item.get('properties') or {})}\n"
                text += "\n"

        if response.get("has_more"):
            text += f"\n*More results available. Showing first {validated.page_size} results.*"

        return ToolResponse.text(text)

    async def _search_by_title(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(SearchByTitleInput, arguments)
        api = self.notion.client

        response = await self.notion.request(
            lambda: api.search(
                query=validated.title,
                filter={"property": "object", "value": "page"},
                page_size=TITLE_SEARCH_PAGE_SIZE,
            )
        )

        wanted = validated.title.lower()
        matches = []
        for page in response.get("results", []):
            if page.get("object") != "page":
                continue
            if validated.in_database and not self._in_database(page, validated.in_database):
                continue
            title = extract_page_title(page).lower()
            if (title == wanted) if validated.exact_match else (wanted in title):
                matches.append(page)

        text = "# Title Search Results\n\n"
        text += f'Found {len(matches)} pages matching "{validated.title}"'
        if validated.exact_match:
            text += " (exact match)"
        text += "\n\n"

        for page in matches:
            text += f"## {extract_page_title(page)}\n"
            text += f"- **ID:** {page['id']}\n"
            text += f"- **URL:** {page.get('url', '')}\n"
            text += f"- **Last edited:** {_date(page.get('last_edited_time'))}\n"
            parent = page.get("parent") or {}
            if parent.get("type") == "database_id":
                text += f"- **Database:** {parent.get('database_id')}\n"

            preview = await self._page_preview(page["id"])
            if preview:
                text += f"- **Preview:** {preview}\n"
            text += "\n"

        if not matches:
            how = "exactly matching" if validated.exact_match else "containing"
            text += f'No pages found with title {how} "{validated.title}"'

        return ToolResponse.text(text)

    @staticmethod
    def _in_database(page: dict[str, Any], database_id: str) -> bool:
        parent = page.get("parent") or {}
        parent_id = parent.get("database_id")
        return bool(parent_id) and _normalize_id(parent_id) == _normalize_id(database_id)

    async def _page_preview(self, page_id: str) -> str:
        """Short text preview of a page.

        Empty if the blocks cannot be fetched or read; the preview never
        fails the search.
        """
        api = self.notion.client
        try:
            blocks = await self.notion.request(
                lambda: api.blocks.children.list(block_id=page_id, page_size=PREVIEW_BLOCK_COUNT)
            )
            return blocks_preview(blocks.get("results", []))
        except Exception as e:
            logger.debug("page_preview_unavailable", page_id=page_id, error=str(e))
            return ""
