"""Notion Database Tools.

Query Notion databases, create and update their entries, and describe
their schema.
"""

from typing import Any

from nmcp_tools.base import ToolDescriptor, ToolMetadata, ToolResponse
from nmcp_tools.errors import ToolRoutingError
from nmcp_tools.validation import validate_arguments
from nmcp_tools.adapters.notion.client import NotionClientWrapper
from nmcp_tools.adapters.notion.formatting import (
    extract_database_title,
    extract_text,
    property_to_text,
    text_block,
    to_notion_properties,
)
from nmcp_tools.adapters.notion.schemas import (
    DatabaseCreatePageInput,
    DatabaseGetSchemaInput,
    DatabaseQueryInput,
    DatabaseUpdatePageInput,
)

# Properties shown as the entry heading rather than in its detail list
_TITLE_KEYS = ("Name", "title")


def _entry_title(properties: dict[str, Any]) -> str:
    """Title of a database entry, falling back to the first property."""
    for key in ("title", "Title", "Name", "name"):
        prop = properties.get(key)
        if isinstance(prop, dict) and prop.get("title"):
            return extract_text(prop["title"])

    first = next(iter(properties.values()), None)
    if isinstance(first, dict) and first.get("title"):
        return extract_text(first["title"])
    return "Untitled"


class NotionDatabaseTools:
    """Tool family for Notion databases.

    Use Cases:
    - "Show open tasks from the project tracker"
    - "Add new entry to project database"
    - "What properties does the CRM database have?"
    """

    family = "database"

    def __init__(self, notion: NotionClientWrapper):
        self.notion = notion
        self._handlers = {
            "notion_database_query": self._query,
            "notion_database_create_page": self._create_page,
            "notion_database_update_page": self._update_page,
            "notion_database_get_schema": self._get_schema,
        }

    def get_tools(self) -> list[ToolDescriptor]:
        return [
            ToolDescriptor.from_model(
                "notion_database_query",
                "Query a Notion database with filters and sorting",
                DatabaseQueryInput,
                ToolMetadata(read_only=True, idempotent=True),
            ),
            ToolDescriptor.from_model(
                "notion_database_create_page",
                "Create a new page in a Notion database",
                DatabaseCreatePageInput,
            ),
            ToolDescriptor.from_model(
                "notion_database_update_page",
                "Update a page in a Notion database",
                DatabaseUpdatePageInput,
                ToolMetadata(idempotent=True),
            ),
            ToolDescriptor.from_model(
                "notion_database_get_schema",
                "Get the schema (properties) of a Notion database",
                DatabaseGetSchemaInput,
                ToolMetadata(read_only=True, idempotent=True),
            ),
        ]

    async def handle_tool(self, name: str, arguments: Any) -> ToolResponse:
        handler = self._handlers.get(name)
        if handler is None:
            raise ToolRoutingError(name)
        return await handler(arguments)

    async def _query(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(DatabaseQueryInput, arguments)
        api = self.notion.client

        query: dict[str, Any] = {"page_size": validated.page_size}
        if validated.filter is not None:
            query["filter"] = validated.filter
        if validated.sorts is not None:
            query["sorts"] = [sort.model_dump() for sort in validated.sorts]

        response = await self.notion.request(
            lambda: api.databases.query(database_id=validated.database_id, **query)
        )
        results = response.get("results", [])

        text = f"Found {len(results)} items:\n\n"
        for page in results:
            properties = page.get("properties")
            if properties is None:
                continue
            text += f"- **{_entry_title(properties)}** (ID: {page['id']})\n"
            for key, value in properties.items():
                if key in _TITLE_KEYS:
                    continue
                display = property_to_text(value)
                if display:
                    text += f"  - {key}: {display}\n"
            text += "\n"

        if response.get("has_more"):
            text += f"*More results available. Showing first {validated.page_size}.*\n"

        return ToolResponse.text(text)

    async def _create_page(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(DatabaseCreatePageInput, arguments)
        api = self.notion.client

        children = [text_block("paragraph", validated.content)] if validated.content else []
        properties = to_notion_properties(validated.properties)

        page = await self.notion.request(
            lambda: api.pages.create(
                parent={"database_id": validated.database_id},
                properties=properties,
                children=children,
            )
        )

        return ToolResponse.text(
            f"Created database page with ID: {page['id']}\nURL: {page.get('url', 'N/A')}"
        )

    async def _update_page(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(DatabaseUpdatePageInput, arguments)
        api = self.notion.client

        properties = to_notion_properties(validated.properties)
        page = await self.notion.request(
            lambda: api.pages.update(page_id=validated.page_id, properties=properties)
        )

        return ToolResponse.text(f"Updated database page {page['id']}")

    async def _get_schema(self, arguments: Any) -> ToolResponse:
        validated = validate_arguments(DatabaseGetSchemaInput, arguments)
        api = self.notion.client

        database = await self.notion.request(
            lambda: api.databases.retrieve(database_id=validated.database_id)
        )

        schema = f"# Database Schema: {extract_database_title(database)}\n\n"
        schema += f"**ID:** {database['id']}\n"
        schema += f"**Created:** {database.get('created_time', '')}\n\n"
        schema += "## Properties\n\n"

        for name, prop in (database.get("properties") or {}).items():
            prop_type = prop.get("type", "")
            schema += f"### {name}\n"
            schema += f"- Type: {prop_type}\n"

            if prop_type in ("select", "multi_select", "status"):
                options = (prop.get(prop_type) or {}).get("options") or []
                if options:
                    schema += f"- Options: {', '.join(o.get('name', '') for o in options)}\n"
            elif prop_type == "relation":
                schema += f"- Related database: {(prop.get('relation') or {}).get('database_id')}\n"
            schema += "\n"

        return ToolResponse.text(schema)
