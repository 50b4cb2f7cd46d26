# -*- coding: utf-8 -*-
"""Unit tests for validation helpers."""

from __future__ import annotations

from polymarket_alerts.utils.validation import (
    as_tx_hash,
    mask_address,
    unique_lower,
)


def test_unique_lower_strips_lowercases_and_keeps_first_seen_order() -> None:
    values = [" 0xAB ", "0xcd", "0xab", "", None, "0xCD", "0xef"]
    assert unique_lower(values) == ["0xab", "0xcd", "0xef"]


def test_as_tx_hash_only_accepts_0x_strings() -> None:
    assert as_tx_hash("0xdead") == "0xdead"
    assert as_tx_hash("dead") is None
    assert as_tx_hash(123) is None


def test_mask_address() -> None:
    assert mask_address("0x1234567890abcdef") == "0x1234...cdef"
    assert mask_address("short") == "***"
    assert mask_address(None) == "***"
