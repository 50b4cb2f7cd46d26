# -*- coding: utf-8 -*-
"""WalletBirthResolver: wallet address -> contract creation time (ISO-8601)."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from polymarket_alerts.exceptions import PolymarketError
from polymarket_alerts.persistence.cache import InflightRegistry, TieredCache
from polymarket_alerts.utils.validation import mask_address, unique_lower
from polymarket_alerts.utils.worker_pool import run_bounded

if TYPE_CHECKING:
    from polymarket_alerts.clients.blockscout_client import BlockscoutClient
    from polymarket_alerts.clients.rpc_client import RpcClient
    from polymarket_alerts.config import Settings

BirthTime = Optional[str]


@dataclass(frozen=True, slots=True)
class BirthResolution:
    """Outcome of one resolve_births call.

    births covers every address kept after the cap (None = unknown).
    untried lists addresses that failed the first pass but were left out of
    the capped retry pass, so their None means "not retried" rather than
    "retried and failed". over_cap lists addresses dropped by the cap; they
    are absent from births.
    """

    births: dict[str, BirthTime] = field(default_factory=dict)
    untried: tuple[str, ...] = ()
    over_cap: tuple[str, ...] = ()

    @property
    def partial(self) -> bool:
        return bool(self.untried or self.over_cap)

    def get(self, address: str) -> BirthTime:
        return self.births.get(address.strip().lower())


class WalletBirthResolver:
    """Resolves when wallets were created, with a durable cache and paced lookups.

    Lookup chain per address: Blockscout v2 creation tx (legacy API as
    fallback) -> RPC transaction -> block -> timestamp. A small worker pool
    with pacing sleeps keeps the outbound rate low; addresses still unknown
    afterwards get one sequential, capped retry pass. Never raises.
    """

    def __init__(
        self,
        blockscout: BlockscoutClient,
        rpc_client: RpcClient,
        cache: TieredCache[BirthTime],
        settings: Settings,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            blockscout: Explorer client for the creation tx hash (injected).
            rpc_client: Polygon RPC client for tx -> block time (injected).
            cache: address -> ISO time cache with positive/negative TTLs.
            settings: Application settings (uses settings.wallet_birth).
            sleep: Pacing sleep (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._blockscout = blockscout
        self._rpc = rpc_client
        self._cache = cache
        self._settings = settings
        self._sleep = sleep
        self._inflight: InflightRegistry[str, BirthTime] = InflightRegistry()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def resolve_births(
        self,
        addresses: Iterable[str],
        cap: Optional[int] = None,
    ) -> BirthResolution:
        """Resolve creation times for up to `cap` distinct (lower-cased) addresses.

        Args:
            addresses: Wallet addresses, any case, duplicates allowed.
            cap: Maximum distinct addresses processed; defaults to
                settings.wallet_birth.max_addresses. Extra ones are dropped.

        Returns:
            BirthResolution with an entry for every address within the cap.
        """
        wb = self._settings.wallet_birth
        limit = wb.max_addresses if cap is None else max(0, cap)
        uniq = unique_lower(addresses)
        working, over_cap = uniq[:limit], uniq[limit:]

        births: dict[str, BirthTime] = {}
        need_fetch: list[str] = []
        for addr in working:
            cached = await self._cache.get(addr)
            # A lookup in flight elsewhere is joined rather than served its placeholder
            if cached.is_fresh and addr not in self._inflight:
                births[addr] = cached.value
            else:
                need_fetch.append(addr)

        async def _first_pass(addr: str) -> None:
            births[addr] = await self._inflight.run(
                addr, partial(self._attempt, addr, mark_pending=True)
            )

        await run_bounded(
            need_fetch,
            _first_pass,
            concurrency=wb.concurrency,
            pacing_seconds=wb.pacing_seconds,
            sleep=self._sleep,
        )

        missing = [a for a in need_fetch if births.get(a) is None]
        retry, untried = missing[: wb.retry_limit], missing[wb.retry_limit :]
        for addr in retry:
            births[addr] = await self._inflight.run(
                addr, partial(self._attempt, addr, mark_pending=False)
            )
            await self._sleep(wb.retry_pacing_seconds)

        self._cache.schedule_flush()

        resolution = BirthResolution(
            births={a: births.get(a) for a in working},
            untried=tuple(untried),
            over_cap=tuple(over_cap),
        )
        log = self._logger.warning if resolution.partial else self._logger.debug
        log(
            "wallet_births_resolved",
            wallet_birth_requested_count=len(uniq),
            wallet_birth_cached_count=len(working) - len(need_fetch),
            wallet_birth_fetched_count=len(need_fetch),
            wallet_birth_retried_count=len(retry),
            wallet_birth_unknown_count=sum(1 for v in resolution.births.values() if v is None),
            wallet_birth_untried_count=len(untried),
            wallet_birth_over_cap_count=len(over_cap),
        )
        return resolution

    async def cached_births(self, addresses: Iterable[str]) -> dict[str, BirthTime]:
        """Creation times from fresh cache entries only (no network); None for the rest."""
        out: dict[str, BirthTime] = {}
        for addr in unique_lower(addresses):
            cached = await self._cache.get(addr)
            out[addr] = cached.value if cached.is_fresh else None
        return out

    async def _attempt(self, addr: str, *, mark_pending: bool) -> BirthTime:
        """One lookup of the full chain. Failures leave the negative entry in place."""
        with bound_contextvars(wallet_address_masked=mask_address(addr)):
            if mark_pending:
                # Negative placeholder: readers see "unknown for now" until this finishes
                await self._cache.put(addr, None)
            try:
                tx_hash = await self._creation_tx_hash(addr)
                created_at = (
                    await self._rpc.get_transaction_time_iso(tx_hash) if tx_hash else None
                )
            except Exception as e:
                self._logger.debug(
                    "wallet_birth_lookup_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                self._cache.schedule_flush()
                return None

            await self._cache.put(addr, created_at)
            self._cache.schedule_flush()
            self._logger.debug(
                "wallet_birth_lookup",
                wallet_birth_tx_found=tx_hash is not None,
                wallet_birth_created_at=created_at,
            )
            return created_at

    async def _creation_tx_hash(self, addr: str) -> Optional[str]:
        try:
            tx_hash = await self._blockscout.get_creation_tx_hash(addr)
        except PolymarketError as e:
            self._logger.debug(
                "blockscout_v2_failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            tx_hash = None
        if tx_hash:
            return tx_hash
        return await self._blockscout.get_creation_tx_hash_legacy(addr)
