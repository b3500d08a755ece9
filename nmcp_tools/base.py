"""Tool Interface & Metadata.

A tool is described by a `ToolDescriptor` and served by a `ToolFamily`.
Every tool call produces a `ToolResponse`.
"""

from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field


class ToolMetadata(BaseModel):
    """Behaviour hints advertised as MCP tool annotations."""

    read_only: bool = False
    destructive: bool = False
    idempotent: bool = False


class ToolDescriptor(BaseModel):
    """Name, description and input schema advertised to the MCP host."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        alias="inputSchema",
    )
    metadata: ToolMetadata = Field(default_factory=ToolMetadata)

    @classmethod
    def from_model(
        cls,
        name: str,
        description: str,
        input_model: type[BaseModel],
        metadata: ToolMetadata | None = None,
    ) -> "ToolDescriptor":
        """Build a descriptor whose input schema is the model's JSON schema."""
        schema = input_model.model_json_schema(by_alias=True)
        schema.pop("title", None)
        return cls(
            name=name,
            description=description,
            input_schema=schema,
            metadata=metadata or ToolMetadata(),
        )


class TextContent(BaseModel):
    """A single text item of a response envelope."""

    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Uniform result of every tool call, successful or not."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent]
    is_error: bool = Field(False, alias="isError")

    @classmethod
    def text(cls, text: str) -> "ToolResponse":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, message: str) -> "ToolResponse":
        return cls(content=[TextContent(text=message)], is_error=True)


class ToolFamily(Protocol):
    """A group of tools sharing a name prefix and a remote client."""

    family: str

    def get_tools(self) -> list[ToolDescriptor]:
        """Descriptors of every tool in the family, in declaration order."""
        ...

    async def handle_tool(self, name: str, arguments: Any) -> ToolResponse:
        """Validate arguments and run the named tool."""
        ...
