"""Entry Point.

Loads configuration, sets up logging and runs the monitor. Fatal errors
end the process with a logged message and a non-zero exit status.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from quakewatch.core.config import validate_config
from quakewatch.monitor import Monitor
from quakewatch.shell.config_loader import ConfigError, load_config
from quakewatch.shell.display import TableDisplay
from quakewatch.shell.feed_client import FeedError


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# RichHandler adds its own time and level columns
CONSOLE_LOG_FORMAT = "%(name)s - %(message)s"

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_CONFIG = 2


def configure_logging(
    level: str,
    log_file: str | None = None,
    console: Console | None = None,
) -> None:
    """Configure root logging once for the process.

    With a log file, records go there in the plain format. Without one,
    they go through the console the live table draws on, so each record
    prints above the table instead of tearing it.

    Args:
        level: Level name such as "INFO"
        log_file: Optional path to log to
        console: Console shared with the live table
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if log_file:
        logging.basicConfig(level=numeric_level, format=LOG_FORMAT, filename=log_file)
        return
    logging.basicConfig(
        level=numeric_level,
        format=CONSOLE_LOG_FORMAT,
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main() -> int:
    """Run quakewatch until interrupted.

    Returns:
        Process exit status
    """
    try:
        config = load_config()
    except ConfigError as e:
        configure_logging("INFO")
        logger.error("Configuration error: %s", e)
        return EXIT_CONFIG

    console = Console()
    configure_logging(config.log_level, config.log_file, console)

    validation = validate_config(config)
    for warning in validation.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    if not validation.valid:
        for error in validation.critical_errors:
            logger.error("Config %s: %s", error.field, error.message)
        return EXIT_CONFIG

    logger.info(
        "Watching %s every %.0fs",
        config.resolved_feed_url,
        config.fetch_interval_seconds,
    )

    monitor = Monitor(config, display=TableDisplay(console=console))
    try:
        monitor.run()
    except FeedError as e:
        logger.error("Fatal: %s", e)
        return EXIT_FATAL
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception:
        logger.exception("Fatal: unexpected error")
        return EXIT_FATAL

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
