# -*- coding: utf-8 -*-
"""JSON file store implementations."""

from polymarket_alerts.persistence.stores.json_file.snapshot_store import JsonFileSnapshotStore

__all__ = ["JsonFileSnapshotStore"]
