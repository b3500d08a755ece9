"""Notion API client wrapper.

The single shared Notion client of the process. Every remote call goes
through `request`, which maps Notion errors onto the adapter exception
hierarchy and retries once on rate limiting.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from notion_client import AsyncClient
from notion_client.errors import APIErrorCode, HTTPResponseError, RequestTimeoutError

from nmcp_tools.executor import RateLimitedExecutor

from .exceptions import (
    NotionAdapterError,
    NotionAuthError,
    NotionRateLimitError,
    NotionResourceNotFoundError,
    NotionTimeoutError,
    NotionValidationError,
)

T = TypeVar("T")


def parse_retry_after(value: Any) -> float | None:
    """Parse a Retry-After header value given in seconds."""
    if value is None:
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if seconds >= 0 else None


class NotionClientWrapper:
    """Notion API client shared by every tool family.

    Provides:
    - Error handling and exception mapping
    - Single retry after a rate-limit response
    """

    def __init__(
        self,
        api_key: str,
        version: str = "2022-06-28",
        timeout_seconds: int = 30,
        executor: RateLimitedExecutor | None = None,
    ):
        """Initialize Notion client.

        Args:
            api_key: Notion integration API key
            version: Notion API version
            timeout_seconds: Request timeout
            executor: Rate-limit aware executor for remote calls
        """
        self.client = AsyncClient(
            auth=api_key,
            notion_version=version,
            timeout_ms=timeout_seconds * 1000,
        )
        self.version = version
        self.executor = executor or RateLimitedExecutor()

    def _map_error(self, error: HTTPResponseError) -> NotionAdapterError:
        """Map Notion API errors to custom exceptions."""
        status = getattr(error, "status", None)
        code = getattr(error, "code", None)
        message = str(error)

        if code == APIErrorCode.RateLimited or status == 429:
            headers = getattr(error, "headers", None) or {}
            return NotionRateLimitError(
                f"Rate limit exceeded: {message}",
                retry_after=parse_retry_after(headers.get("retry-after")),
            )
        if code == APIErrorCode.Unauthorized or status == 401:
            return NotionAuthError(f"Authentication failed: {message}")
        if code == APIErrorCode.ObjectNotFound or status == 404:
            return NotionResourceNotFoundError(f"Resource not found: {message}")
        if code == APIErrorCode.ValidationError or status == 400:
            return NotionValidationError(f"Invalid request: {message}")
        return NotionAdapterError(f"Notion API error ({status}): {message}")

    async def request(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run one remote call.

        Args:
            operation: Zero-argument coroutine function calling `self.client`

        Returns:
            Response from Notion API

        Raises:
            NotionAuthError: Invalid API key
            NotionRateLimitError: Still rate limited after the retry
            NotionAdapterError: Other API errors
        """

        async def attempt() -> T:
            try:
                return await operation()
            except HTTPResponseError as e:
                raise self._map_error(e) from e
            except RequestTimeoutError as e:
                raise NotionTimeoutError(f"Request timed out: {e}") from e

        return await self.executor.run(attempt)

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self.client.aclose()
