# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, API__GAMMA_HOST,
WALLET_BIRTH__CACHE_FILE.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "polymarket-alerts"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Console goes to stderr so the CLI can print the alert JSON on stdout
    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/alerts.log"
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Hosts and HTTP behaviour for every upstream service."""

    model_config = SettingsConfigDict(extra="ignore")

    data_api_host: str = Field(
        default="https://data-api.polymarket.com",
        description="Polymarket Data API base URL (trade source).",
    )
    gamma_host: str = Field(
        default="https://gamma-api.polymarket.com",
        description="Polymarket Gamma API base URL (markets, event tags).",
    )
    blockscout_host: str = Field(
        default="https://polygon.blockscout.com",
        description="Blockscout explorer base URL (v2 and legacy API).",
    )
    polygon_rpc_url: str = Field(
        default="https://polygon-rpc.com",
        description="Polygon JSON-RPC endpoint.",
    )
    timeout_seconds: float = Field(
        default=8.0,
        ge=1.0,
        le=120.0,
        description="Per-attempt HTTP timeout in seconds.",
    )
    max_retries: int = Field(
        default=2,
        ge=1,
        le=20,
        description="Maximum attempts per request before giving up.",
    )


class WalletBirthSettings(BaseSettings):
    """Wallet creation-time resolution (Blockscout + RPC) and its durable cache."""

    model_config = SettingsConfigDict(extra="ignore")

    positive_ttl_seconds: float = Field(default=24 * 60 * 60, ge=0.0)
    negative_ttl_seconds: float = Field(default=60 * 60, ge=0.0)
    concurrency: int = Field(default=2, ge=1, le=16)
    pacing_seconds: float = Field(default=0.25, ge=0.0, le=10.0)
    retry_limit: int = Field(
        default=30,
        ge=0,
        le=500,
        description="Maximum addresses given a second, sequential attempt.",
    )
    retry_pacing_seconds: float = Field(default=0.3, ge=0.0, le=10.0)
    max_addresses: int = Field(
        default=100,
        ge=1,
        le=5000,
        description="Per-call cap on distinct addresses sent to the resolver.",
    )
    cache_file: str = Field(
        default=".birthCache.json",
        description="Snapshot file for the wallet-birth cache.",
    )
    flush_delay_seconds: float = Field(default=0.8, ge=0.0, le=60.0)
    max_persisted_entries: int = Field(default=5000, ge=1, le=1_000_000)
    max_memory_entries: int = Field(default=50_000, ge=1)


class CategorySettings(BaseSettings):
    """Market -> event -> tags classification through the Gamma API."""

    model_config = SettingsConfigDict(extra="ignore")

    chunk_size: int = Field(
        default=30,
        ge=1,
        le=100,
        description="Condition ids per batched /markets request.",
    )
    tag_ttl_seconds: float = Field(
        default=6 * 60 * 60,
        ge=0.0,
        description="TTL of event tag lists and of market -> event links.",
    )
    market_event_negative_ttl_seconds: float = Field(
        default=10 * 60,
        ge=0.0,
        description="TTL of 'market has no event' answers.",
    )
    concurrency: int = Field(default=4, ge=1, le=32)
    pacing_seconds: float = Field(default=0.08, ge=0.0, le=10.0)
    max_memory_entries: int = Field(default=10_000, ge=1)


class AlertsSettings(BaseSettings):
    """Large-trade feed parameters."""

    model_config = SettingsConfigDict(extra="ignore")

    min_cash_usd: float = Field(
        default=10_000.0,
        ge=0.0,
        description="Minimum cash amount (USDC) of trades pulled from the Data API.",
    )
    limit: int = Field(default=30, ge=1, le=30)
    deadline_seconds: float = Field(
        default=20.0,
        ge=0.1,
        le=300.0,
        description="Overall enrichment time limit; partial results are returned after it.",
    )


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, CATEGORIES__CHUNK_SIZE.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    wallet_birth: WalletBirthSettings = Field(default_factory=WalletBirthSettings)
    categories: CategorySettings = Field(default_factory=CategorySettings)
    alerts: AlertsSettings = Field(default_factory=AlertsSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.
        from_env(wallet_birth={"concurrency": 1}).

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from polymarket_alerts.config import get_settings

        settings = get_settings()
        ttl = settings.wallet_birth.positive_ttl_seconds
    """
    return Settings()
