"""Dependency injection."""

from polymarket_alerts.DI.container import Container

__all__ = ["Container"]
