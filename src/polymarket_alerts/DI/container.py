# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from typing import Optional

from dependency_injector import containers, providers

from polymarket_alerts.clients.blockscout_client import BlockscoutClient
from polymarket_alerts.clients.data_api import DataApiClient
from polymarket_alerts.clients.gamma_api import GammaApiClient
from polymarket_alerts.clients.http import AsyncHttpClient
from polymarket_alerts.clients.rpc_client import RpcClient
from polymarket_alerts.config import Settings, get_settings
from polymarket_alerts.persistence.cache import TieredCache, TtlPolicy
from polymarket_alerts.persistence.stores.json_file import JsonFileSnapshotStore
from polymarket_alerts.services.alerts import AlertFeedService
from polymarket_alerts.services.enrichment import EnrichmentOrchestrator
from polymarket_alerts.services.market_category import MarketCategoryResolver
from polymarket_alerts.services.wallet_birth import WalletBirthResolver


def _build_birth_cache(settings: Settings) -> TieredCache[Optional[str]]:
    """Wallet-birth cache persisted as {address: {createdAtIso, cachedAtMs}}."""
    wb = settings.wallet_birth
    store: JsonFileSnapshotStore[Optional[str]] = JsonFileSnapshotStore(
        wb.cache_file,
        Optional[str],
        value_field="createdAtIso",
        written_at_field="cachedAtMs",
    )
    return TieredCache(
        "wallet_birth",
        TtlPolicy(
            positive_seconds=wb.positive_ttl_seconds,
            negative_seconds=wb.negative_ttl_seconds,
        ),
        store=store,
        flush_delay_seconds=wb.flush_delay_seconds,
        max_persisted_entries=wb.max_persisted_entries,
        max_memory_entries=wb.max_memory_entries,
    )


def _build_tag_cache(settings: Settings) -> TieredCache[tuple[str, ...]]:
    """Memory-only event_id -> tag slugs cache."""
    cs = settings.categories
    return TieredCache(
        "event_tags",
        TtlPolicy.flat(cs.tag_ttl_seconds),
        max_memory_entries=cs.max_memory_entries,
    )


def _build_market_event_cache(settings: Settings) -> TieredCache[Optional[str]]:
    """Memory-only condition_id -> event_id cache (None: market has no event)."""
    cs = settings.categories
    return TieredCache(
        "market_events",
        TtlPolicy(
            positive_seconds=cs.tag_ttl_seconds,
            negative_seconds=cs.market_event_negative_ttl_seconds,
        ),
        max_memory_entries=cs.max_memory_entries,
    )


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP/API clients, caches, resolvers, alert feed."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    data_api_client = providers.Singleton(
        DataApiClient,
        http_client=http_client,
        settings=config,
    )

    gamma_api_client = providers.Singleton(
        GammaApiClient,
        http_client=http_client,
        settings=config,
    )

    blockscout_client = providers.Singleton(
        BlockscoutClient,
        http_client=http_client,
        settings=config,
    )

    rpc_client = providers.Singleton(
        RpcClient,
        http_client=http_client,
        settings=config,
    )

    birth_cache = providers.Singleton(_build_birth_cache, config)

    tag_cache = providers.Singleton(_build_tag_cache, config)

    market_event_cache = providers.Singleton(_build_market_event_cache, config)

    wallet_birth_resolver = providers.Singleton(
        WalletBirthResolver,
        blockscout=blockscout_client,
        rpc_client=rpc_client,
        cache=birth_cache,
        settings=config,
    )

    market_category_resolver = providers.Singleton(
        MarketCategoryResolver,
        gamma_client=gamma_api_client,
        tag_cache=tag_cache,
        market_event_cache=market_event_cache,
        settings=config,
    )

    enrichment_orchestrator = providers.Singleton(
        EnrichmentOrchestrator,
        wallet_birth_resolver=wallet_birth_resolver,
        market_category_resolver=market_category_resolver,
        settings=config,
    )

    alert_feed_service = providers.Singleton(
        AlertFeedService,
        data_api=data_api_client,
        orchestrator=enrichment_orchestrator,
        birth_cache=birth_cache,
        settings=config,
    )
