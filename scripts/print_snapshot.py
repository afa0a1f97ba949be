#!/usr/bin/env python3
"""Print one snapshot of the feed as a table.

Fetches the feed once, reconciles it into a fresh table and prints it
with the same formatting as the live display, then exits. Handy for
checking a feed or a timezone setting without starting the live loop.

Usage:
    # Default feed (all earthquakes, past hour), local time
    python scripts/print_snapshot.py

    # Significant earthquakes of the past week, shown in UTC
    python scripts/print_snapshot.py --feed significant_week --timezone UTC

    # Any GeoJSON feed URL
    python scripts/print_snapshot.py --url https://example.com/feed.geojson
"""

import argparse
import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rich.console import Console

from quakewatch.core.config import DEFAULT_FEED, build_feed_url, load_timezone
from quakewatch.core.reconcile import reconcile
from quakewatch.core.store import EventStore
from quakewatch.monitor import format_caption
from quakewatch.shell.display import TableDisplay
from quakewatch.shell.feed_client import FeedClient, FeedError
from quakewatch.shell.table_sync import TableSync

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print one snapshot of the USGS earthquake feed.")
    parser.add_argument(
        "--feed",
        default=DEFAULT_FEED,
        help="Named summary feed, e.g. all_hour, 2.5_day (default: %(default)s)",
    )
    parser.add_argument("--url", help="Feed URL, overrides --feed")
    parser.add_argument("--timezone", help="IANA timezone for times (default: local)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        url = args.url or build_feed_url(args.feed)
        tz = load_timezone(args.timezone)
    except (ValueError, LookupError) as e:
        logger.error("%s", e)
        return 2

    client = FeedClient(url=url)
    try:
        snapshot = client.fetch_snapshot()
    except FeedError as e:
        logger.error("%s", e)
        return 1
    finally:
        client.close()

    store = EventStore()
    display = TableDisplay(title=snapshot.metadata.title or "Recent earthquakes")
    TableSync(display).upsert_rows(reconcile(snapshot, store, tz))
    display.process_pending()
    display.set_caption(format_caption(snapshot, len(store), tz))

    Console().print(display.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())
