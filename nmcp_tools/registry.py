"""Tool Registry.

Flattens the descriptors of every tool family into an exact-name routing
table. Family order is preserved for listing.
"""

from collections.abc import Iterable

from nmcp_tools.base import ToolDescriptor, ToolFamily, ToolMetadata

SETUP_REQUIRED_TOOL = ToolDescriptor(
    name="notion_setup_required",
    description="Notion API key not configured. Set NOTION_API_KEY environment variable.",
    input_schema={"type": "object", "properties": {}},
    metadata=ToolMetadata(read_only=True, idempotent=True),
)


class ToolRegistry:
    """Tool registry with exact-name routing."""

    def __init__(self, families: Iterable[ToolFamily] = ()):
        self._tools: dict[str, ToolDescriptor] = {}
        self._routes: dict[str, ToolFamily] = {}
        for family in families:
            self.register(family)

    def register(self, family: ToolFamily) -> None:
        """Register every tool of a family.

        Raises:
            ValueError: A tool name is already registered
        """
        descriptors = family.get_tools()
        for descriptor in descriptors:
            if descriptor.name in self._tools:
                raise ValueError(f"Duplicate tool name: {descriptor.name}")

        for descriptor in descriptors:
            self._tools[descriptor.name] = descriptor
            self._routes[descriptor.name] = family

    def list_tools(self) -> list[ToolDescriptor]:
        """All descriptors, in registration order."""
        return list(self._tools.values())

    def get(self, name: str) -> ToolDescriptor | None:
        """Get tool descriptor by name."""
        return self._tools.get(name)

    def resolve(self, name: str) -> ToolFamily | None:
        """Get the family that serves a tool name."""
        return self._routes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
