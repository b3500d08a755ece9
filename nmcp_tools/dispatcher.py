"""Tool call dispatcher.

The single entry point for `tools/list` and `tools/call`. Every failure,
expected or not, is turned into an error envelope here and logged to the
diagnostic channel; nothing raised by a tool crosses this boundary.
"""

import time
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from nmcp_obs.logging import get_logger, tool_call_context
from nmcp_obs.metrics import tool_execution_duration, tool_executions_total
from nmcp_tools.base import ToolDescriptor, ToolResponse
from nmcp_tools.errors import ToolRoutingError
from nmcp_tools.lifecycle import Degraded, ServerLifecycle
from nmcp_tools.registry import SETUP_REQUIRED_TOOL

logger = get_logger(__name__)
tracer = trace.get_tracer(__name__)

CONFIGURATION_REQUIRED_MESSAGE = (
    "Notion API key not configured. Please set the NOTION_API_KEY environment "
    "variable in your MCP client configuration."
)


class Dispatcher:
    """Routes tool calls to their family and normalizes the result."""

    def __init__(self, lifecycle: ServerLifecycle):
        self.lifecycle = lifecycle

    def list_tools(self) -> list[ToolDescriptor]:
        """Descriptors to advertise to the host."""
        if isinstance(self.lifecycle, Degraded):
            return [SETUP_REQUIRED_TOOL]
        return self.lifecycle.registry.list_tools()

    async def dispatch(self, name: str, arguments: Any) -> ToolResponse:
        """Run one tool call.

        Args:
            name: Tool name from the call request
            arguments: Raw tool arguments (any JSON value, or None)

        Returns:
            Handler result, or an error envelope describing the failure
        """
        if isinstance(self.lifecycle, Degraded):
            return ToolResponse.error(CONFIGURATION_REQUIRED_MESSAGE)

        started = time.perf_counter()
        metric_name = name if name in self.lifecycle.registry else "unknown"

        with tracer.start_as_current_span("tool.call") as span, tool_call_context(name):
            span.set_attribute("tool.name", name)
            try:
                family = self.lifecycle.registry.resolve(name)
                if family is None:
                    raise ToolRoutingError(name)
                response = await family.handle_tool(name, arguments)
            except Exception as e:
                message = str(e) or type(e).__name__
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, message))
                self._log_failure(name, e, message)
                self._record(metric_name, "failure", started)
                return ToolResponse.error(f"Error: {message}")

        self._record(metric_name, "success", started)
        return response

    def _log_failure(self, name: str, error: Exception, message: str) -> None:
        try:
            logger.error(
                "tool_call_failed",
                tool_name=name,
                error_type=type(error).__name__,
                error=message,
            )
        except Exception:
            # The response must go out even if the log sink is broken.
            pass

    def _record(self, name: str, status: str, started: float) -> None:
        tool_executions_total.labels(tool_name=name, status=status).inc()
        tool_execution_duration.labels(tool_name=name).observe(time.perf_counter() - started)
