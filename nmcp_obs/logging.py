"""
Structured Logging (structlog).

Logs go to stderr: stdout is reserved for the MCP stdio transport.

Every log line emitted while a tool call is running carries `tool_name`,
including lines from the Notion client and the rate-limit executor, which
do not know which tool they serve.
"""

import logging
import sys
from contextlib import AbstractContextManager

import structlog

from nmcp_config.settings import Settings


def setup_logging(settings: Settings) -> None:
    """
    Configure structlog for structured logging.

    Output format: JSON (default) or text (dev)
    """
    logging.basicConfig(
        format="%(message)s", stream=sys.stderr, level=settings.LOG_LEVEL.upper()
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        # No ANSI colors: MCP hosts usually capture stderr into a log file
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get configured logger."""
    return structlog.get_logger(name)


def tool_call_context(tool_name: str) -> AbstractContextManager:
    """Bind `tool_name` to every log line for the duration of one tool call."""
    return structlog.contextvars.bound_contextvars(tool_name=tool_name)
