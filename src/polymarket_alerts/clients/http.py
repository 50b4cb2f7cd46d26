# -*- coding: utf-8 -*-
"""Async HTTP client with retries and rate-limit handling."""

from __future__ import annotations

import asyncio
import random
import uuid
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional, Union

import aiohttp
import structlog
from structlog.contextvars import bound_contextvars

from polymarket_alerts.config import Settings
from polymarket_alerts.exceptions import PolymarketAPIError, RateLimitError

# Mapping or list of (key, value) pairs; the latter allows repeated keys (?a=1&a=2)
QueryParams = Union[Mapping[str, Any], Sequence[tuple[str, Any]]]


class AsyncHttpClient:
    """Async HTTP client shared by every upstream client (Data API, Gamma, Blockscout, RPC).

    Each attempt is bounded by settings.api.timeout_seconds; failed attempts are
    retried with exponential backoff up to settings.api.max_retries, and a 429
    waits for Retry-After (or the backoff) before trying again.
    If no session is provided, one is created and must be closed via aclose()
    or by using the client as an async context manager.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (timeout, max_retries).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.api.timeout_seconds)
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                headers={"Accept": "application/json"},
            )
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        base = min(4.0, 0.25 * (2**attempt))
        return base + random.uniform(0.0, 0.15)

    @staticmethod
    def _retry_after(response: aiohttp.ClientResponse) -> Optional[float]:
        header = response.headers.get("Retry-After")
        if not header:
            return None
        try:
            value = float(header)
        except ValueError:
            return None
        return value if value > 0 else None

    async def get(
        self,
        url: str,
        *,
        params: Optional[QueryParams] = None,
        not_found_ok: bool = False,
    ) -> Any:
        """Perform a GET request and return parsed JSON.

        Args:
            url: Full URL to request.
            params: Optional query parameters; pass a list of pairs to repeat a key.
            not_found_ok: Return None on HTTP 404 instead of retrying and raising.

        Returns:
            Parsed JSON response (dict or list), or None for an accepted 404.

        Raises:
            RateLimitError: If 429 is returned on every attempt.
            PolymarketAPIError: If the request fails after all retries.
        """
        return await self._request("GET", url, params=params, not_found_ok=not_found_ok)

    async def post(
        self,
        url: str,
        *,
        json: Optional[Any] = None,
    ) -> Any:
        """Perform a POST request with a JSON body and return parsed JSON.

        Raises:
            RateLimitError: If 429 is returned on every attempt.
            PolymarketAPIError: If the request fails after all retries.
        """
        return await self._request("POST", url, json=json if json is not None else {})

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[QueryParams] = None,
        json: Optional[Any] = None,
        not_found_ok: bool = False,
    ) -> Any:
        request_id = uuid.uuid4().hex[:12]
        max_retries = self._settings.api.max_retries
        event_prefix = f"http_{method.lower()}"
        last_error: Optional[Exception] = None
        last_retry_after: Optional[float] = None
        rate_limited = False

        with bound_contextvars(
            http_method=method,
            http_url=url,
            http_request_id=request_id,
            http_max_retries=max_retries,
        ):
            for attempt in range(max_retries):
                with bound_contextvars(http_attempt=attempt + 1):
                    try:
                        session = await self._get_session()
                        async with session.request(
                            method, url, params=params, json=json
                        ) as response:
                            if response.status == 429:
                                rate_limited = True
                                last_retry_after = self._retry_after(response)
                                self._logger.warning(
                                    f"{event_prefix}_rate_limited",
                                    http_status_code=429,
                                    http_retry_after_seconds=last_retry_after,
                                )
                                await asyncio.sleep(
                                    last_retry_after
                                    if last_retry_after is not None
                                    else self._backoff_delay(attempt)
                                )
                                continue
                            if response.status == 404 and not_found_ok:
                                return None

                            response.raise_for_status()
                            return await response.json(content_type=None)
                    except aiohttp.ClientResponseError as e:
                        last_error = e
                        rate_limited = False
                        self._logger.debug(
                            f"{event_prefix}_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                            http_status_code=e.status,
                        )
                    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                        # ValueError covers undecodable JSON bodies
                        last_error = e
                        rate_limited = False
                        self._logger.debug(
                            f"{event_prefix}_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                        )
                    if attempt + 1 < max_retries:
                        await asyncio.sleep(self._backoff_delay(attempt))

            if rate_limited:
                self._logger.warning(f"{event_prefix}_rate_limit_exhausted", http_attempts=max_retries)
                raise RateLimitError(url=url, retry_after=last_retry_after)

            status_code = (
                last_error.status if isinstance(last_error, aiohttp.ClientResponseError) else None
            )
            self._logger.warning(
                f"{event_prefix}_failed",
                http_status_code=status_code,
                http_attempts=max_retries,
                error_type=type(last_error).__name__ if last_error else None,
                error_message=str(last_error) if last_error else None,
            )
            raise PolymarketAPIError(
                f"{method} failed after {max_retries} attempts: {url}",
                url=url,
                status_code=status_code,
                cause=last_error,
            ) from last_error
