"""Notion Block Tools.

Append, list, update and delete the blocks that make up page content.
"""

from typing import Any

from nmcp_tools.base import ToolDescriptor, ToolMetadata, ToolResponse
from nmcp_tools.errors import ToolRoutingError
from nmcp_tools.validation import validate_arguments
from nmcp_tools.adapters.notion.client import NotionClientWrapper
from nmcp_tools.adapters.notion.formatting import (
    block_from_spec,
    format_block_tree,
    rich_text,
)
from nmcp_tools.adapters.notion.schemas import (
    BlockAppendInput,
    BlockDeleteInput,
    BlockGetChildrenInput,
    BlockUpdateInput,
)


class NotionBlockTools:
    """Tool family for Notion blocks."""

    family = "block"

    def __init__(self, notion: NotionClientWrapper):
        self.notion = notion
        self._handlers = {
            "notion_block_append": self._append,
            "notion_block_get_children": self._get_children,
            "notion_block_update": self._update,
            "notion_block_delete": self._delete,
        }

    def get_tools(self) -> list[ToolDescriptor]:
        return [
            ToolDescriptor.from_model(
                "notion_block_append",
                "Append blocks to a page or another block",
                BlockAppendInput,
            ),
            ToolDescriptor.from_model(
                "notion_block_get_children",
                "Get all child blocks of a page or block",
                BlockGetChildrenInput,
                ToolMetadata(read_only=True, idempotent=True),
            ),
            ToolDescriptor.from_model(
                "notion_block_update",
                "Update an existing block",
                BlockUpdateInput,
                ToolMetadata(idempotent=True),
            ),
            ToolDescriptor.from_model(
                "notion_block_delete",
                "Delete a block",
                BlockDeleteInput,
                ToolMetadata(destructive=True, idempotent=True),
            ),
        ]

    async def handle_tool(self, name: str, arguments: Any) -> ToolResponse:
        handler = self._handlers.get(name)
        if handler is None:
            raise ToolRoutingError(name)
        return await handler(arguments)

    async def _append(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(BlockAppendInput, arguments)
        api = self.notion.client

        children = [block_from_spec(spec) for spec in validated.blocks]
        response = await self.notion.request(
            lambda: api.blocks.children.append(block_id=validated.parent_id, children=children)
        )

        appended = len(response.get("results", []))
        return ToolResponse.text(
            f"Successfully appended {appended} blocks to {validated.parent_id}"
        )

    async def _get_children(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(BlockGetChildrenInput, arguments)

        blocks = await self._fetch_children(validated.block_id, validated.recursive)

        return ToolResponse.text("# Block Children\n\n" + format_block_tree(blocks))

    async def _fetch_children(self, block_id: str, recursive: bool) -> list[dict[str, Any]]:
        """List child blocks, descending into nested blocks if asked."""
        api = self.notion.client
        response = await self.notion.request(
            lambda: api.blocks.children.list(block_id=block_id, page_size=100)
        )
        blocks = response.get("results", [])

        if recursive:
            for block in blocks:
                if block.get("has_children"):
                    block["children"] = await self._fetch_children(block["id"], True)

        return blocks

    async def _update(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(BlockUpdateInput, arguments)
        api = self.notion.client

        # The payload is keyed by block type, so look the block up first
        block = await self.notion.request(
            lambda: api.blocks.retrieve(block_id=validated.block_id)
        )
        block_type = block.get("type")

        update_data: dict[str, Any] = {}
        if block_type:
            if validated.content is not None:
                if block_type == "to_do":
                    update_data["to_do"] = {"rich_text": rich_text(validated.content)}
                    if validated.checked is not None:
                        update_data["to_do"]["checked"] = validated.checked
                elif block_type != "divider":
                    update_data[block_type] = {"rich_text": rich_text(validated.content)}
            elif validated.checked is not None and block_type == "to_do":
                update_data["to_do"] = {"checked": validated.checked}

        await self.notion.request(
            lambda: api.blocks.update(block_id=validated.block_id, **update_data)
        )

        return ToolResponse.text(f"Updated block {validated.block_id}")

    async def _delete(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(BlockDeleteInput, arguments)
        api = self.notion.client

        await self.notion.request(lambda: api.blocks.delete(block_id=validated.block_id))

        return ToolResponse.text(f"Deleted block {validated.block_id}")
