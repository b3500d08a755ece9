"""Server lifecycle.

The lifecycle is decided once, at startup, from the presence of the Notion
credential:

- Ready: the Notion client and the full tool registry exist.
- Degraded: no credential; only the setup tool is listed and every call
  is answered with a configuration error.

There is no hot-reload: a degraded server stays degraded until restarted.
"""

from dataclasses import dataclass

from nmcp_config.settings import Settings
from nmcp_tools.adapters.notion import NotionClientWrapper, build_notion_families
from nmcp_tools.executor import RateLimitedExecutor
from nmcp_tools.registry import ToolRegistry


@dataclass(frozen=True)
class Ready:
    """Credential present; tools are served."""

    client: NotionClientWrapper
    registry: ToolRegistry


@dataclass(frozen=True)
class Degraded:
    """Credential absent; the server is reachable but does no real work."""

    reason: str = "NOTION_API_KEY is not set"


ServerLifecycle = Ready | Degraded


def create_lifecycle(settings: Settings) -> ServerLifecycle:
    """Build the lifecycle for this process."""
    if not settings.notion_configured:
        return Degraded()

    executor = RateLimitedExecutor(default_retry_after=settings.RATE_LIMIT_DEFAULT_RETRY_AFTER)
    client = NotionClientWrapper(
        api_key=settings.NOTION_API_KEY.strip(),
        version=settings.NOTION_API_VERSION,
        timeout_seconds=settings.NOTION_TIMEOUT_SECONDS,
        executor=executor,
    )
    registry = ToolRegistry(build_notion_families(client))
    return Ready(client=client, registry=registry)
