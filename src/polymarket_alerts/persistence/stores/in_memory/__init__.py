# -*- coding: utf-8 -*-
"""In-memory store implementations."""

from polymarket_alerts.persistence.stores.in_memory.snapshot_store import InMemorySnapshotStore

__all__ = ["InMemorySnapshotStore"]
