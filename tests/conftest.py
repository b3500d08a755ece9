"""Pytest fixtures.

The Notion SDK client is replaced by `FakeNotionAPI`, whose endpoints are
AsyncMocks returning a generic Notion object, so no test touches the
network.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from notion_client.errors import APIResponseError

from nmcp_config.settings import Settings
from nmcp_tools.adapters.notion import NotionClientWrapper, build_notion_families
from nmcp_tools.dispatcher import Dispatcher
from nmcp_tools.executor import RateLimitedExecutor
from nmcp_tools.lifecycle import Degraded, Ready
from nmcp_tools.registry import ToolRegistry

GENERIC_NOTION_OBJECT: dict[str, Any] = {
    "object": "page",
    "id": "obj-123",
    "url": "https://notion.so/obj-123",
    "type": "paragraph",
    "paragraph": {"rich_text": []},
    "created_time": "2025-11-03T00:00:00.000Z",
    "last_edited_time": "2025-11-03T12:00:00.000Z",
    "properties": {},
    "results": [],
    "has_more": False,
}

# Minimal arguments satisfying each tool's input schema
SAMPLE_ARGUMENTS: dict[str, dict[str, Any]] = {
    "notion_page_create": {"title": "New Page"},
    "notion_page_get": {"pageId": "page-123"},
    "notion_page_update": {"pageId": "page-123", "title": "Renamed"},
    "notion_page_delete": {"pageId": "page-123"},
    "notion_database_query": {"databaseId": "db-123"},
    "notion_database_create_page": {"databaseId": "db-123", "properties": {"Name": "Task"}},
    "notion_database_update_page": {"pageId": "page-123", "properties": {"Done": True}},
    "notion_database_get_schema": {"databaseId": "db-123"},
    "notion_block_append": {
        "parentId": "page-123",
        "blocks": [{"type": "paragraph", "content": "Hello"}],
    },
    "notion_block_get_children": {"blockId": "block-123"},
    "notion_block_update": {"blockId": "block-123", "content": "Edited"},
    "notion_block_delete": {"blockId": "block-123"},
    "notion_search": {},
    "notion_search_by_title": {"title": "Roadmap"},
}


class FakeNotionAPI:
    """Stand-in for `notion_client.AsyncClient` with AsyncMock endpoints."""

    def __init__(self, response: dict[str, Any] | None = None):
        response = response if response is not None else GENERIC_NOTION_OBJECT
        self.search = AsyncMock(return_value=response)
        self.pages = MagicMock()
        self.pages.create = AsyncMock(return_value=response)
        self.pages.retrieve = AsyncMock(return_value=response)
        self.pages.update = AsyncMock(return_value=response)
        self.databases = MagicMock()
        self.databases.query = AsyncMock(return_value=response)
        self.databases.retrieve = AsyncMock(return_value=response)
        self.blocks = MagicMock()
        self.blocks.retrieve = AsyncMock(return_value=response)
        self.blocks.update = AsyncMock(return_value=response)
        self.blocks.delete = AsyncMock(return_value=response)
        self.blocks.children = MagicMock()
        self.blocks.children.list = AsyncMock(return_value=response)
        self.blocks.children.append = AsyncMock(return_value=response)
        self.aclose = AsyncMock()

    @property
    def endpoints(self) -> list[AsyncMock]:
        return [
            self.search,
            self.pages.create,
            self.pages.retrieve,
            self.pages.update,
            self.databases.query,
            self.databases.retrieve,
            self.blocks.retrieve,
            self.blocks.update,
            self.blocks.delete,
            self.blocks.children.list,
            self.blocks.children.append,
        ]

    @property
    def await_count(self) -> int:
        return sum(endpoint.await_count for endpoint in self.endpoints)


class RecordingSleep:
    """Replacement for asyncio.sleep that records waits on a virtual clock."""

    def __init__(self):
        self.calls: list[float] = []
        self.now = 0.0

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        self.now += seconds


def make_api_error(
    status: int,
    code: str,
    message: str = "Notion API error",
    headers: dict[str, str] | None = None,
) -> APIResponseError:
    """Build a real notion_client APIResponseError."""
    request = httpx.Request("POST", "https://api.notion.com/v1/search")
    response = httpx.Response(
        status,
        headers=headers or {},
        json={"object": "error", "status": status, "code": code, "message": message},
        request=request,
    )
    return APIResponseError(response, message, code)


@pytest.fixture
def mock_api_key():
    """Fake API key for testing."""
    return "secret_test_key_12345"


@pytest.fixture
def ready_settings(mock_api_key):
    return Settings(_env_file=None, NOTION_API_KEY=mock_api_key)


@pytest.fixture
def degraded_settings():
    return Settings(_env_file=None, NOTION_API_KEY="")


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def notion_api():
    return FakeNotionAPI()


@pytest.fixture
def notion_client(mock_api_key, notion_api, recording_sleep):
    """NotionClientWrapper backed by the fake API and a non-waiting executor."""
    client = NotionClientWrapper(
        api_key=mock_api_key,
        executor=RateLimitedExecutor(default_retry_after=5.0, sleep=recording_sleep),
    )
    client.client = notion_api
    return client


@pytest.fixture
def registry(notion_client):
    return ToolRegistry(build_notion_families(notion_client))


@pytest.fixture
def dispatcher(notion_client, registry):
    return Dispatcher(Ready(client=notion_client, registry=registry))


@pytest.fixture
def degraded_dispatcher():
    return Dispatcher(Degraded())
