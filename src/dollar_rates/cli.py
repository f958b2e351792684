"""Command-line entry point: run the refresher and serve the API."""

from __future__ import annotations

import argparse
import sys
from typing import List

import uvicorn

from dollar_rates.cache import SnapshotCache
from dollar_rates.config import ConfigError, load_config
from dollar_rates.fetcher import Fetcher
from dollar_rates.logger import get_logger, set_level
from dollar_rates.refresher import INSECURE_HOSTS, RateRefresher
from dollar_rates.service import create_app

LOGGER = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scrape BCV dollar rates and serve them over HTTP.")
    parser.add_argument("--config", default="config.yml", help="Path to config YAML.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Root log level.",
    )
    return parser


def main(argv: List[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    set_level(args.log_level)
    try:
        config = load_config(args.config)
    except ConfigError as exc:
        LOGGER.error("Could not load configuration: %s", exc)
        sys.exit(1)

    cache = SnapshotCache()
    fetcher = Fetcher(timeout=config.timeout_seconds, insecure_hosts=INSECURE_HOSTS)
    refresher = RateRefresher(
        cache,
        interval_seconds=config.interval_seconds,
        fetcher=fetcher,
        url=config.source_url,
    )
    refresher.start()
    try:
        LOGGER.info("Waiting for the first successful scrape before serving")
        cache.wait_ready()
        uvicorn.run(create_app(cache), host=config.host, port=config.port)
    except KeyboardInterrupt:
        LOGGER.info("Interrupted, shutting down")
    finally:
        refresher.stop(timeout=config.timeout_seconds)


if __name__ == "__main__":
    main()
