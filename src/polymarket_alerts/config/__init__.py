"""Configuration subpackage."""

from polymarket_alerts.config.config import (
    AlertsSettings,
    ApiSettings,
    AppSettings,
    CategorySettings,
    LoggingSettings,
    Settings,
    WalletBirthSettings,
    get_settings,
)

__all__ = [
    "AlertsSettings",
    "ApiSettings",
    "AppSettings",
    "CategorySettings",
    "LoggingSettings",
    "Settings",
    "WalletBirthSettings",
    "get_settings",
]
