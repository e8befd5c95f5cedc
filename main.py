from __future__ import annotations

import argparse
import logging
import sys

from harvester.config import (
    DEFAULT_DELAY_SECS,
    DEFAULT_MAX_CONCURRENT,
    DEFAULT_MAX_WORKERS,
    DEFAULT_TIMEOUT_SECS,
    PROVINCES,
    HarvestSettings,
)
from harvester.coordinator import Harvester
from harvester.errors import SelectorParseError

logger = logging.getLogger(__name__)


def run_harvest(
    provinces: tuple[str, ...],
    max_concurrent: int,
    max_workers: int,
    delay: float,
    timeout: float,
    discover: bool,
    impersonate: str | None,
) -> int:
    settings = HarvestSettings(
        provinces=provinces,
        max_concurrent=max_concurrent,
        max_workers=max_workers,
        delay_secs=delay,
        timeout_secs=timeout,
        discover_provinces=discover,
        impersonate=impersonate,
    )
    try:
        harvester = Harvester(settings)
    except SelectorParseError as exc:
        logger.error("aborting before any request: %s", exc)
        return 2

    with harvester:
        harvester.harvest()
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Harvest current weather for every province-level region")
    parser.add_argument(
        "--province",
        action="append",
        dest="provinces",
        help="Province identifier to crawl (repeatable; default: all built-in provinces)",
    )
    parser.add_argument("--discover", action="store_true", help="Read the province list from the national index page")
    parser.add_argument("--max-concurrent", type=int, default=DEFAULT_MAX_CONCURRENT, help="Detail pages fetched at once")
    parser.add_argument("--max-workers", type=int, default=DEFAULT_MAX_WORKERS, help="ThreadPoolExecutor max workers")
    parser.add_argument("--delay", type=float, default=DEFAULT_DELAY_SECS, help="Seconds to wait before each detail request")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_SECS, help="Per-request timeout in seconds")
    parser.add_argument("--impersonate", default=None, help="Browser to impersonate via curl_cffi, e.g. chrome120")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for diagnostics on stderr")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    sys.exit(
        run_harvest(
            provinces=tuple(args.provinces) if args.provinces else PROVINCES,
            max_concurrent=args.max_concurrent,
            max_workers=args.max_workers,
            delay=args.delay,
            timeout=args.timeout,
            discover=args.discover,
            impersonate=args.impersonate,
        )
    )


if __name__ == "__main__":
    main()
