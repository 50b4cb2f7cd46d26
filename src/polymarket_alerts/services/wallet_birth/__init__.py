"""Wallet creation-time services."""

from polymarket_alerts.services.wallet_birth.wallet_birth_resolver import (
    BirthResolution,
    WalletBirthResolver,
)

__all__ = ["BirthResolution", "WalletBirthResolver"]
