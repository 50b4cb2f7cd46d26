"""Validation helpers for addresses, hashes and id lists."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


def as_tx_hash(x: Any) -> str | None:
    """Return x if it looks like a 0x-prefixed hash, else None."""
    if isinstance(x, str) and x.startswith("0x"):
        return x
    return None


def unique_lower(values: Iterable[Any]) -> list[str]:
    """Lower-case and strip, drop blanks and duplicates, keep first-seen order."""
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        s = str(v or "").strip().lower()
        if not s or s in seen:
            continue
        seen.add(s)
        out.append(s)
    return out


def mask_address(addr: str | None) -> str:
    """Return a masked wallet address for logging (e.g. 0x1234...abcd)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:6]}...{addr[-4:]}"
