# -*- coding: utf-8 -*-
"""Snapshot stores: interfaces (abstractions) and implementations (json_file, in_memory)."""

from polymarket_alerts.persistence.stores.interfaces import ISnapshotStore
from polymarket_alerts.persistence.stores.in_memory import InMemorySnapshotStore
from polymarket_alerts.persistence.stores.json_file import JsonFileSnapshotStore

__all__ = [
    "ISnapshotStore",
    "InMemorySnapshotStore",
    "JsonFileSnapshotStore",
]
