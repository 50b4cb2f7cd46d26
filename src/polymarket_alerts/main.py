# -*- coding: utf-8 -*-
"""
Entry point for the large-trade alert feed.

Orchestrates: logging, settings, container, durable cache load, one alert
build, JSON output on stdout, then cache flush and HTTP shutdown.
Trades flow: Data API -> dedupe -> wallet births || market categories -> join.

Run with: python -m polymarket_alerts.main
Filters come from settings (ALERTS__MIN_CASH_USD, ALERTS__LIMIT).

Notebook usage:
    from polymarket_alerts.main import run
    alerts = await run()
"""
from __future__ import annotations

import asyncio
import json
import sys
from typing import Any

import structlog

from polymarket_alerts.DI import Container
from polymarket_alerts.exceptions import PolymarketAPIError
from polymarket_alerts.logging.config import configure_logging


async def _do_shutdown(container: Container, logger: Any) -> None:
    """Flush the wallet-birth cache and close the shared HTTP session."""
    await container.birth_cache().aclose()
    await container.http_client().aclose()
    logger.debug("main_shutdown_complete")


async def run() -> list[dict[str, Any]]:
    """Build the alert feed once and return it as camelCase dicts."""
    configure_logging()
    logger = structlog.get_logger("main")
    container = Container()
    feed = container.alert_feed_service()
    try:
        alerts = await feed.get_alerts()
        return [a.to_dict() for a in alerts]
    finally:
        await _do_shutdown(container, logger)


def main() -> None:
    try:
        alerts = asyncio.run(run())
    except PolymarketAPIError as e:
        structlog.get_logger("main").error(
            "main_trade_feed_unavailable",
            http_status_code=e.status_code,
            error_message=str(e),
        )
        sys.exit(1)
    json.dump(alerts, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
