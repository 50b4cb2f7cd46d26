"""Polymarket Data API client and response schema."""

from polymarket_alerts.clients.data_api.data_api import DataApiClient
from polymarket_alerts.clients.data_api.schema import TradeSchema

__all__ = ["DataApiClient", "TradeSchema"]
