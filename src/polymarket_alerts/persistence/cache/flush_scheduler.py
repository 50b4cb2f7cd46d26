# -*- coding: utf-8 -*-
"""Debounced, single-flight scheduler for durable cache flushes."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

import structlog


class FlushScheduler:
    """Coalesces flush requests into one delayed write.

    schedule() starts a timer unless one is already pending; when the timer
    fires the pending slot is released first, so writes requested while the
    flush is running start a new timer instead of being lost. Writes never
    overlap each other.
    """

    def __init__(
        self,
        flush: Callable[[], Awaitable[None]],
        *,
        delay_seconds: float = 0.8,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            flush: Coroutine function performing the actual write.
            delay_seconds: Debounce delay between the first request and the write.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._flush = flush
        self._delay = max(0.0, delay_seconds)
        self._pending: Optional[asyncio.Task[None]] = None
        self._running: set[asyncio.Task[None]] = set()
        self._write_lock = asyncio.Lock()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def pending(self) -> bool:
        """True while a timer is waiting to fire."""
        return self._pending is not None and not self._pending.done()

    def schedule(self) -> bool:
        """Request a flush. Returns False (no-op) if one is already pending.

        Must be called from a running event loop.
        """
        if self.pending:
            return False
        task = asyncio.get_running_loop().create_task(self._delayed_flush())
        self._pending = task
        self._running.add(task)
        task.add_done_callback(self._running.discard)
        return True

    def cancel(self) -> bool:
        """Drop the pending timer, if any. A write already in progress is not interrupted."""
        if not self.pending:
            return False
        assert self._pending is not None
        self._pending.cancel()
        self._pending = None
        return True

    async def flush_now(self) -> None:
        """Cancel any pending timer and write immediately."""
        self.cancel()
        await self._write()

    async def wait(self) -> None:
        """Wait until every timer and write started so far has finished."""
        while self._running:
            await asyncio.gather(*list(self._running), return_exceptions=True)

    async def _delayed_flush(self) -> None:
        await asyncio.sleep(self._delay)
        self._pending = None
        await self._write()

    async def _write(self) -> None:
        async with self._write_lock:
            try:
                await self._flush()
            except Exception as e:
                self._logger.exception(
                    "cache_flush_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
