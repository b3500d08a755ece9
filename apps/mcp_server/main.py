"""
Notion MCP Server Entry Point.

Startup:
- Settings, logging, tracing and metrics
- Lifecycle: ready with NOTION_API_KEY, degraded without it
- MCP server on stdio

Exit status is 0 on SIGINT/SIGTERM or when the host closes stdin, and 1
if the server cannot be configured or constructed.
"""

import asyncio
import contextlib
import signal
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server

from apps.mcp_server.server import create_server
from nmcp_config.settings import Settings
from nmcp_obs.logging import get_logger, setup_logging
from nmcp_obs.metrics import setup_metrics
from nmcp_obs.tracing import setup_tracing
from nmcp_tools.dispatcher import Dispatcher
from nmcp_tools.lifecycle import Ready, ServerLifecycle, create_lifecycle

logger = get_logger(__name__)


class StartupError(Exception):
    """The server could not be constructed."""

    pass


def log_unhandled_exception(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    """Event loop exception handler: log and keep serving."""
    exception = context.get("exception")
    logger.error(
        "unhandled_async_error",
        message=context.get("message"),
        error=repr(exception) if exception else None,
    )


def log_lifecycle(lifecycle: ServerLifecycle) -> None:
    if isinstance(lifecycle, Ready):
        logger.info("server_ready", tools=len(lifecycle.registry))
    else:
        logger.warning(
            "server_degraded",
            reason=lifecycle.reason,
            hint="Set NOTION_API_KEY in the environment or your MCP client configuration",
        )


def build(settings: Settings) -> tuple[ServerLifecycle, Server]:
    """Construct lifecycle and MCP server.

    Raises:
        StartupError: Construction failed
    """
    try:
        lifecycle = create_lifecycle(settings)
        dispatcher = Dispatcher(lifecycle)
        server = create_server(dispatcher, settings.MCP_SERVER_NAME, settings.MCP_SERVER_VERSION)
    except Exception as e:
        logger.critical("fatal_startup_error", error=str(e), exc_info=True)
        raise StartupError(str(e)) from e
    return lifecycle, server


async def serve_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


async def run(settings: Settings) -> None:
    """Serve until the host disconnects or a shutdown signal arrives."""
    loop = asyncio.get_running_loop()
    loop.set_exception_handler(log_unhandled_exception)

    lifecycle, server = build(settings)
    log_lifecycle(lifecycle)

    stop = asyncio.Event()

    def request_shutdown(sig: signal.Signals) -> None:
        logger.info("shutdown_requested", signal=sig.name)
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on Windows; SIGINT still arrives as KeyboardInterrupt
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, request_shutdown, sig)

    server_task = asyncio.create_task(serve_stdio(server))
    stop_task = asyncio.create_task(stop.wait())

    try:
        done, _ = await asyncio.wait({server_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        if server_task in done:
            server_task.result()
        for task in (server_task, stop_task):
            if not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                loop.remove_signal_handler(sig)
        if isinstance(lifecycle, Ready):
            await lifecycle.client.aclose()
        logger.info("server_stopped")


def main() -> None:
    """Console entry point."""
    try:
        settings = Settings()
    except Exception as e:
        # Logging is configured from settings, so report on plain stderr
        print(f"fatal_startup_error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(settings)
    try:
        setup_tracing(settings)
        setup_metrics(settings)
    except Exception as e:
        logger.critical("fatal_startup_error", error=str(e), exc_info=True)
        sys.exit(1)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("shutdown_requested", signal="SIGINT")
        sys.exit(0)
    except StartupError:
        sys.exit(1)


if __name__ == "__main__":
    main()
