# -*- coding: utf-8 -*-
"""Snapshot store backed by a single JSON file, validated with pydantic."""

from __future__ import annotations

import asyncio
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Generic, Optional, TypeVar

import structlog
from pydantic import TypeAdapter, ValidationError

from polymarket_alerts.exceptions import CacheStoreError
from polymarket_alerts.persistence.cache.entry import CacheEntry
from polymarket_alerts.persistence.stores.interfaces.snapshot_store import ISnapshotStore

V = TypeVar("V")

_FILE_ADAPTER: TypeAdapter[dict[str, dict[str, Any]]] = TypeAdapter(dict[str, dict[str, Any]])


class JsonFileSnapshotStore(ISnapshotStore[V], Generic[V]):
    """Stores `{key: {<value_field>: value, <written_at_field>: epoch_ms}}` in one file.

    The file is rewritten wholesale on every save through a temp file and
    os.replace, so readers never observe a half-written snapshot. Rows whose
    value does not validate against `value_type` are dropped on load.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        value_type: Any,
        *,
        value_field: str = "value",
        written_at_field: str = "cachedAtMs",
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the store.

        Args:
            path: Snapshot file path.
            value_type: Type of cached values (e.g. Optional[str]); used for validation.
            value_field: JSON key holding the value in each row.
            written_at_field: JSON key holding the write time (epoch ms) in each row.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._path = Path(path)
        self._value_adapter: TypeAdapter[Any] = TypeAdapter(value_type)
        self._value_field = value_field
        self._written_at_field = written_at_field
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> dict[str, CacheEntry[V]]:
        return await asyncio.to_thread(self._load_sync)

    async def save(self, entries: Mapping[str, CacheEntry[V]]) -> None:
        payload = {
            k: {
                self._value_field: self._value_adapter.dump_python(e.value, mode="json"),
                self._written_at_field: e.written_at_ms,
            }
            for k, e in entries.items()
        }
        data = _FILE_ADAPTER.dump_json(payload)
        await asyncio.to_thread(self._write_sync, data)

    def _load_sync(self) -> dict[str, CacheEntry[V]]:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise CacheStoreError(
                f"cannot read cache snapshot: {self._path}", path=str(self._path), cause=e
            ) from e

        try:
            rows = _FILE_ADAPTER.validate_json(raw)
        except ValidationError as e:
            raise CacheStoreError(
                f"malformed cache snapshot: {self._path}", path=str(self._path), cause=e
            ) from e

        out: dict[str, CacheEntry[V]] = {}
        skipped = 0
        for key, row in rows.items():
            written_at = row.get(self._written_at_field)
            if not isinstance(written_at, (int, float)) or isinstance(written_at, bool):
                skipped += 1
                continue
            try:
                value = self._value_adapter.validate_python(row.get(self._value_field))
            except ValidationError:
                skipped += 1
                continue
            out[key] = CacheEntry(value=value, written_at_ms=int(written_at))
        if skipped:
            self._logger.warning(
                "snapshot_store_rows_skipped",
                snapshot_path=str(self._path),
                snapshot_skipped_count=skipped,
            )
        return out

    def _write_sync(self, data: bytes) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp, self._path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise CacheStoreError(
                f"cannot write cache snapshot: {self._path}", path=str(self._path), cause=e
            ) from e
