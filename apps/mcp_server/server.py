"""
MCP protocol binding.

Maps the dispatcher onto the low-level MCP server: `tools/list` advertises
the dispatcher's descriptors and `tools/call` returns its envelope as a
`CallToolResult`.
"""

from mcp import types
from mcp.server import Server

from nmcp_tools.base import ToolDescriptor, ToolResponse
from nmcp_tools.dispatcher import Dispatcher


def to_mcp_tool(descriptor: ToolDescriptor) -> types.Tool:
    """Convert a tool descriptor to its MCP wire form."""
    metadata = descriptor.metadata
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.input_schema,
        annotations=types.ToolAnnotations(
            readOnlyHint=metadata.read_only,
            destructiveHint=metadata.destructive,
            idempotentHint=metadata.idempotent,
        ),
    )


def to_call_tool_result(response: ToolResponse) -> types.CallToolResult:
    """Convert a response envelope to its MCP wire form."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=item.text) for item in response.content],
        isError=response.is_error,
    )


def create_server(dispatcher: Dispatcher, name: str, version: str) -> Server:
    """Create the MCP server for a dispatcher.

    Args:
        dispatcher: Dispatcher bound to this process's lifecycle
        name: Server name reported at initialization
        version: Server version reported at initialization

    Returns:
        Low-level MCP server with tool handlers installed
    """
    server = Server(name, version=version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [to_mcp_tool(descriptor) for descriptor in dispatcher.list_tools()]

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        response = await dispatcher.dispatch(request.params.name, request.params.arguments)
        return types.ServerResult(to_call_tool_result(response))

    # Installed directly rather than via @server.call_tool(): the decorator
    # checks arguments against inputSchema itself, and argument errors must
    # be reported by the dispatcher's validator.
    server.request_handlers[types.CallToolRequest] = call_tool

    return server
