"""USGS Feed Client - Imperative Shell.

This module handles HTTP communication with the USGS summary feed.
All I/O is contained here; parsing lives in the core module.
"""

import logging

import requests

from quakewatch.core.config import build_feed_url, DEFAULT_FEED
from quakewatch.core.event import FeedFormatError, FeedSnapshot, parse_snapshot


logger = logging.getLogger(__name__)


# Default timeout for feed requests (seconds)
DEFAULT_TIMEOUT = 30


class FeedError(Exception):
    """Fetching or decoding the feed failed.

    This is fatal: the caller is expected to stop the process.
    """


class FeedClient:
    """Client for fetching snapshots of the USGS earthquake feed.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize feed client.

        Args:
            url: Feed URL (defaults to the all_hour summary feed)
            timeout: Request timeout in seconds
            session: Optional requests session to reuse connections
        """
        self.url = url or build_feed_url(DEFAULT_FEED)
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_snapshot(self) -> FeedSnapshot:
        """Fetch and decode one feed snapshot.

        This method performs HTTP I/O. There is no retry.

        Returns:
            Parsed FeedSnapshot

        Raises:
            FeedError: On transport, HTTP status or decode failure
        """
        logger.debug("Fetching feed %s", self.url)

        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise FeedError(f"Failed to fetch {self.url}: {e}") from e
        except ValueError as e:
            raise FeedError(f"Invalid JSON from {self.url}: {e}") from e

        try:
            snapshot = parse_snapshot(data)
        except FeedFormatError as e:
            raise FeedError(f"Unexpected document from {self.url}: {e}") from e

        logger.info(
            "Fetched %d events from feed (metadata count %d)",
            len(snapshot.events),
            snapshot.metadata.count,
        )

        return snapshot

    def close(self) -> None:
        self.session.close()
