"""Notion adapter exceptions.

Custom exception hierarchy for Notion API errors. Every class is a
`RemoteError`; the rate-limit error is also the executor's retry signal.
"""

from nmcp_tools.errors import RateLimitError, RemoteError


class NotionAdapterError(RemoteError):
    """Base exception for Notion adapter."""

    pass


class NotionAuthError(NotionAdapterError):
    """Invalid API key or insufficient permissions."""

    pass


class NotionRateLimitError(RateLimitError, NotionAdapterError):
    """Rate limit exceeded (429 response)."""

    pass


class NotionResourceNotFoundError(NotionAdapterError):
    """Page/database/block not found (404 response)."""

    pass


class NotionValidationError(NotionAdapterError):
    """Request rejected by Notion as malformed (400 response)."""

    pass


class NotionTimeoutError(NotionAdapterError):
    """Request did not complete within the client timeout."""

    pass
