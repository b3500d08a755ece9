"""Notion adapter Pydantic schemas.

Input schemas for all Notion tools. Field aliases are the camelCase names
advertised to the MCP host; the JSON schema of each model is the tool's
`inputSchema`. Primitive fields are strict so that, e.g., "10" is rejected
where a number is expected.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr


class ToolInput(BaseModel):
    """Base for tool input models."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ============================================================================
# PAGE TOOL SCHEMAS
# ============================================================================


class PageCreateInput(ToolInput):
    """Input schema for notion_page_create."""

    title: StrictStr = Field(..., description="Title of the page")
    content: StrictStr | None = Field(
        None, description="Content of the page (supports markdown)"
    )
    parent_page_id: StrictStr | None = Field(
        None,
        alias="parentPageId",
        description="Parent page ID (optional, creates in workspace root if not provided)",
    )


class PageGetInput(ToolInput):
    """Input schema for notion_page_get."""

    page_id: StrictStr = Field(..., alias="pageId", description="The ID of the page to retrieve")
    include_content: StrictBool = Field(
        True, alias="includeContent", description="Whether to include page content blocks"
    )


class PageUpdateInput(ToolInput):
    """Input schema for notion_page_update."""

    page_id: StrictStr = Field(..., alias="pageId", description="The ID of the page to update")
    title: StrictStr | None = Field(None, description="New title for the page")
    archived: StrictBool | None = Field(None, description="Archive/unarchive the page")


class PageDeleteInput(ToolInput):
    """Input schema for notion_page_delete."""

    page_id: StrictStr = Field(..., alias="pageId", description="The ID of the page to delete")


# ============================================================================
# DATABASE TOOL SCHEMAS
# ============================================================================


class DatabaseSort(BaseModel):
    """One sort of a database query."""

    property: StrictStr
    direction: Literal["ascending", "descending"]


class DatabaseQueryInput(ToolInput):
    """Input schema for notion_database_query."""

    database_id: StrictStr = Field(
        ..., alias="databaseId", description="The ID of the database to query"
    )
    filter: dict[str, Any] | None = Field(None, description="Filter object (Notion API format)")
    sorts: list[DatabaseSort] | None = Field(None, description="Array of sort objects")
    page_size: StrictInt = Field(
        10, ge=1, le=100, alias="pageSize", description="Number of results to return (max 100)"
    )


class DatabaseCreatePageInput(ToolInput):
    """Input schema for notion_database_create_page."""

    database_id: StrictStr = Field(..., alias="databaseId", description="The ID of the database")
    properties: dict[str, Any] = Field(..., description="Properties for the new database page")
    content: StrictStr | None = Field(None, description="Optional content for the page")


class DatabaseUpdatePageInput(ToolInput):
    """Input schema for notion_database_update_page."""

    page_id: StrictStr = Field(..., alias="pageId", description="The ID of the page to update")
    properties: dict[str, Any] = Field(..., description="Properties to update")


class DatabaseGetSchemaInput(ToolInput):
    """Input schema for notion_database_get_schema."""

    database_id: StrictStr = Field(..., alias="databaseId", description="The ID of the database")


# ============================================================================
# BLOCK TOOL SCHEMAS
# ============================================================================

BlockType = Literal[
    "paragraph",
    "heading_1",
    "heading_2",
    "heading_3",
    "bulleted_list_item",
    "numbered_list_item",
    "to_do",
    "code",
    "quote",
    "divider",
]


class BlockSpec(BaseModel):
    """A block to append, in simplified form."""

    type: BlockType
    content: StrictStr | None = Field(None, description="Text content of the block")
    checked: StrictBool | None = Field(None, description="For to_do blocks, whether it's checked")
    language: StrictStr | None = Field(
        None, description="For code blocks, the programming language"
    )


class BlockAppendInput(ToolInput):
    """Input schema for notion_block_append."""

    parent_id: StrictStr = Field(..., alias="parentId", description="ID of the parent page or block")
    blocks: list[BlockSpec] = Field(..., description="Array of blocks to append")


class BlockGetChildrenInput(ToolInput):
    """Input schema for notion_block_get_children."""

    block_id: StrictStr = Field(..., alias="blockId", description="ID of the parent block or page")
    recursive: StrictBool = Field(False, description="Whether to fetch nested blocks recursively")


class BlockUpdateInput(ToolInput):
    """Input schema for notion_block_update."""

    block_id: StrictStr = Field(..., alias="blockId", description="ID of the block to update")
    content: StrictStr | None = Field(None, description="New content for the block")
    checked: StrictBool | None = Field(None, description="For to_do blocks, whether it's checked")


class BlockDeleteInput(ToolInput):
    """Input schema for notion_block_delete."""

    block_id: StrictStr = Field(..., alias="blockId", description="ID of the block to delete")


# ============================================================================
# SEARCH TOOL SCHEMAS
# ============================================================================


class SearchFilter(BaseModel):
    """Restrict search results to one object kind."""

    property: Literal["object"] = Field(..., description="Property to filter by")
    value: Literal["page", "database"] = Field(
        ..., description="Filter for only pages or only databases"
    )


class SearchSort(BaseModel):
    """Search result ordering."""

    direction: Literal["ascending", "descending"] = "descending"
    timestamp: Literal["last_edited_time"] = "last_edited_time"


class SearchInput(ToolInput):
    """Input schema for notion_search."""

    query: StrictStr | None = Field(None, description="Search query text")
    filter: SearchFilter | None = None
    sort: SearchSort | None = None
    page_size: StrictInt = Field(
        20, ge=1, le=100, alias="pageSize", description="Number of results to return (max 100)"
    )


class SearchByTitleInput(ToolInput):
    """Input schema for notion_search_by_title."""

    title: StrictStr = Field(..., description="Title to search for (partial match supported)")
    exact_match: StrictBool = Field(
        False, alias="exactMatch", description="Whether to search for exact title match"
    )
    in_database: StrictStr | None = Field(
        None, alias="inDatabase", description="Optional: Limit search to a specific database ID"
    )
