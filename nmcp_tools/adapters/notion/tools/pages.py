"""Notion Page Tools.

Create, read, update and archive Notion pages.
"""

from typing import Any

from nmcp_tools.base import ToolDescriptor, ToolMetadata, ToolResponse
from nmcp_tools.errors import ToolRoutingError
from nmcp_tools.validation import validate_arguments
from nmcp_tools.adapters.notion.client import NotionClientWrapper
from nmcp_tools.adapters.notion.formatting import (
    block_to_text,
    extract_page_title,
    markdown_to_blocks,
)
from nmcp_tools.adapters.notion.schemas import (
    PageCreateInput,
    PageDeleteInput,
    PageGetInput,
    PageUpdateInput,
)


class NotionPageTools:
    """Tool family for Notion pages.

    Use Cases:
    - "Create a summary page for research findings"
    - "Get content from page ID abc123"
    - "Archive the old meeting notes page"
    """

    family = "page"

    def __init__(self, notion: NotionClientWrapper):
        self.notion = notion
        self._handlers = {
            "notion_page_create": self._create,
            "notion_page_get": self._get,
            "notion_page_update": self._update,
            "notion_page_delete": self._delete,
        }

    def get_tools(self) -> list[ToolDescriptor]:
        return [
            ToolDescriptor.from_model(
                "notion_page_create",
                "Create a new Notion page",
                PageCreateInput,
            ),
            ToolDescriptor.from_model(
                "notion_page_get",
                "Get a Notion page by ID",
                PageGetInput,
                ToolMetadata(read_only=True, idempotent=True),
            ),
            ToolDescriptor.from_model(
                "notion_page_update",
                "Update a Notion page",
                PageUpdateInput,
                ToolMetadata(idempotent=True),
            ),
            ToolDescriptor.from_model(
                "notion_page_delete",
                "Delete (archive) a Notion page",
                PageDeleteInput,
                ToolMetadata(destructive=True, idempotent=True),
            ),
        ]

    async def handle_tool(self, name: str, arguments: Any) -> ToolResponse:
        handler = self._handlers.get(name)
        if handler is None:
            raise ToolRoutingError(name)
        return await handler(arguments)

    async def _create(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(PageCreateInput, arguments)
        api = self.notion.client

        page_data: dict[str, Any] = {
            "properties": {"title": {"title": [{"text": {"content": validated.title}}]}},
            "children": markdown_to_blocks(validated.content) if validated.content else [],
        }
        if validated.parent_page_id:
            page_data["parent"] = {"page_id": validated.parent_page_id}

        page = await self.notion.request(lambda: api.pages.create(**page_data))

        return ToolResponse.text(
            f'Created page "{validated.title}" with ID: {page["id"]}\n'
            f"URL: {page.get('url') or 'N/A'}"
        )

    async def _get(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(PageGetInput, arguments)
        api = self.notion.client

        page = await self.notion.request(lambda: api.pages.retrieve(page_id=validated.page_id))

        content = "# Page Information\n\n"
        content += f"**Title:** {extract_page_title(page)}\n"
        content += f"**ID:** {page['id']}\n"
        content += f"**URL:** {page.get('url', 'N/A')}\n"
        content += f"**Created:** {page.get('created_time', '')}\n"
        content += f"**Last edited:** {page.get('last_edited_time', '')}\n"
        if page.get("archived"):
            content += "**Archived:** yes\n"

        if validated.include_content:
            blocks = await self.notion.request(
                lambda: api.blocks.children.list(block_id=validated.page_id, page_size=100)
            )
            results = blocks.get("results", [])
            if results:
                content += "\n## Content\n\n"
                for block in results:
                    content += block_to_text(block) + "\n"

        return ToolResponse.text(content)

    async def _update(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(PageUpdateInput, arguments)
        api = self.notion.client

        updates: dict[str, Any] = {}
        if validated.title:
            updates["properties"] = {
                "title": {"title": [{"text": {"content": validated.title}}]}
            }
        if validated.archived is not None:
            updates["archived"] = validated.archived

        page = await self.notion.request(
            lambda: api.pages.update(page_id=validated.page_id, **updates)
        )

        message = f"Updated page {page['id']}"
        if validated.title:
            message += f' with new title "{validated.title}"'
        if validated.archived is not None:
            message += f" (archived: {str(validated.archived).lower()})"
        return ToolResponse.text(message)

    async def _delete(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(PageDeleteInput, arguments)
        api = self.notion.client

        await self.notion.request(
            lambda: api.pages.update(page_id=validated.page_id, archived=True)
        )

        return ToolResponse.text(f"Archived page {validated.page_id}")
