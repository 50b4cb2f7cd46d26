"""Custom exceptions for upstream APIs and the enrichment cache."""

from __future__ import annotations


class PolymarketError(Exception):
    """Base exception for errors raised by this package."""

    pass


class PolymarketAPIError(PolymarketError):
    """Raised when an upstream HTTP request fails after retries."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(PolymarketAPIError):
    """Raised when the API keeps returning HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class RpcError(PolymarketError):
    """Raised when a JSON-RPC response carries an error object or an unexpected shape."""

    def __init__(self, message: str, *, method: str | None = None, code: int | None = None) -> None:
        super().__init__(message)
        self.method = method
        self.code = code


class CacheStoreError(PolymarketError):
    """Raised when the durable cache snapshot cannot be read or written."""

    def __init__(self, message: str, *, path: str | None = None, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause
