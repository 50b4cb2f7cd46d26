"""Alert feed services."""

from polymarket_alerts.services.alerts.alert_feed import AlertFeedService

__all__ = ["AlertFeedService"]
