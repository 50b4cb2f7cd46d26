"""In-flight request deduplication: one shared outcome per key."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def _being_cancelled() -> bool:
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


class InflightRegistry(Generic[K, V]):
    """Maps key -> pending future so concurrent callers for the same key await one lookup."""

    def __init__(self) -> None:
        self._pending: dict[K, asyncio.Future[V]] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._pending

    def __len__(self) -> int:
        return len(self._pending)

    async def run(self, key: K, factory: Callable[[], Awaitable[V]]) -> V:
        """Return factory()'s result, starting it only if no call for `key` is in flight.

        Joiners are shielded: cancelling one waiter does not cancel the shared lookup.
        If the caller that started the lookup is cancelled, a joiner that was not
        cancelled itself takes the key over and runs factory() on its own.
        """
        while (existing := self._pending.get(key)) is not None:
            try:
                return await asyncio.shield(existing)
            except asyncio.CancelledError:
                if not existing.cancelled() or _being_cancelled():
                    raise

        fut: asyncio.Future[V] = asyncio.get_running_loop().create_future()
        self._pending[key] = fut
        try:
            result = await factory()
        except asyncio.CancelledError:
            fut.cancel()
            raise
        except BaseException as e:
            fut.set_exception(e)
            # Mark retrieved so an unjoined failure is not reported as lost
            fut.exception()
            raise
        else:
            fut.set_result(result)
            return result
        finally:
            if self._pending.get(key) is fut:
                del self._pending[key]
