"""Fixed-size asyncio worker pool with start pacing."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

T = TypeVar("T")


async def run_bounded(
    items: Iterable[T],
    handler: Callable[[T], Awaitable[None]],
    *,
    concurrency: int,
    pacing_seconds: float = 0.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Run handler over items with at most `concurrency` calls in flight.

    Workers drain one shared queue, so every item is handled exactly once.
    After each item a worker sleeps `pacing_seconds` before taking the next one.
    handler must not raise; an exception escaping it cancels the remaining workers
    and propagates.
    """
    queue: asyncio.Queue[T] = asyncio.Queue()
    for item in items:
        queue.put_nowait(item)
    if queue.empty():
        return

    async def _worker() -> None:
        while True:
            try:
                item = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            await handler(item)
            if pacing_seconds > 0:
                await sleep(pacing_seconds)

    workers = [
        asyncio.create_task(_worker()) for _ in range(max(1, min(concurrency, queue.qsize())))
    ]
    try:
        await asyncio.gather(*workers)
    except BaseException:
        for w in workers:
            w.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        raise
