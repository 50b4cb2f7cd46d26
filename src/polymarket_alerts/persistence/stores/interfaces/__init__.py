# -*- coding: utf-8 -*-
"""Store interfaces (abstractions). Implementations live in json_file/, in_memory/."""

from polymarket_alerts.persistence.stores.interfaces.snapshot_store import ISnapshotStore

__all__ = ["ISnapshotStore"]
