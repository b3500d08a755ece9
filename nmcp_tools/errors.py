"""Tool call failure kinds.

Every failure raised while serving a tool call is one of these (or an
unexpected exception); the dispatcher turns all of them into an error
response envelope.
"""


class ToolError(Exception):
    """Base exception for tool call failures."""

    pass


class ToolValidationError(ToolError):
    """Tool arguments do not satisfy the tool's input schema."""

    def __init__(self, violations: list[str]):
        self.violations = violations
        super().__init__("Invalid arguments: " + "; ".join(violations))


class ToolRoutingError(ToolError):
    """No registered tool family claims the requested name."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class RemoteError(ToolError):
    """The remote API call failed."""

    pass


class RateLimitError(RemoteError):
    """The remote API asked the caller to slow down.

    `retry_after` is the server-advised wait in seconds, if one was sent.
    """

    def __init__(self, message: str, retry_after: float | None = None):
        super().__init__(message)
        self.retry_after = retry_after
