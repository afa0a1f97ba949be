"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS feed client (HTTP)
- Configuration loading (environment/files)
- The live terminal display and its serialised update queue

Keep this layer thin and simple. All business logic should be in core.
"""

from quakewatch.shell.feed_client import FeedClient, FeedError
from quakewatch.shell.config_loader import load_config, ConfigError
from quakewatch.shell.display import TableDisplay
from quakewatch.shell.table_sync import TableSync

__all__ = [
    "FeedClient",
    "FeedError",
    "load_config",
    "ConfigError",
    "TableDisplay",
    "TableSync",
]
