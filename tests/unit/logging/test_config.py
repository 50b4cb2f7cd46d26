# -*- coding: utf-8 -*-
"""Unit tests for configure_logging."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from polymarket_alerts.config import Settings
from polymarket_alerts.logging.config import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    logging.basicConfig(handlers=[logging.NullHandler()], force=True)


def test_file_output_is_json_with_service_context(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "alerts.log"
    settings = Settings.from_env(
        app={"environment": "test", "service_name": "alerts-cli"},
        logging={
            "log_to_console": False,
            "log_to_file": True,
            "log_file_path": str(log_file),
            "file_level": "DEBUG",
        },
    )
    configure_logging(settings)

    structlog.get_logger("WalletBirthResolver").info("wallet_births_resolved", wallet_birth_requested_count=3)
    for handler in logging.getLogger().handlers:
        handler.flush()

    record = json.loads(log_file.read_text().strip().splitlines()[-1])
    assert record["event"] == "wallet_births_resolved"
    assert record["wallet_birth_requested_count"] == 3
    assert record["logger"] == "WalletBirthResolver"
    assert record["app_name"] == "polymarket-alerts"
    assert record["service_name"] == "alerts-cli"
    assert record["environment"] == "test"
    assert record["level"] == "info"


def test_chatty_third_party_loggers_are_quieted() -> None:
    configure_logging(Settings.from_env(logging={"log_to_console": True}))

    assert logging.getLogger("aiohttp.client").level == logging.WARNING
