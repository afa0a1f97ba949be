"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


FEED_BASE_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary"

FEED_LEVELS = ("significant", "4.5", "2.5", "1.0", "all")
FEED_PERIODS = ("hour", "day", "week", "month")

DEFAULT_FEED = "all_hour"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        feed: Named USGS summary feed, "<level>_<period>"
        feed_url: Explicit feed URL, overrides feed when set
        fetch_interval_seconds: How often to fetch and reconcile
        redraw_interval_seconds: How often to repaint the table
        request_timeout_seconds: HTTP timeout for one fetch
        display_timezone: IANA zone for displayed times (None for local)
        log_level: Logging level name
        log_file: Write logs here instead of stderr (None for stderr)
    """
    feed: str = DEFAULT_FEED
    feed_url: str | None = None
    fetch_interval_seconds: float = 60.0
    redraw_interval_seconds: float = 1.0
    request_timeout_seconds: float = 30.0
    display_timezone: str | None = None
    log_level: str = "INFO"
    log_file: str | None = None

    @property
    def resolved_feed_url(self) -> str:
        """Return the URL to poll."""
        if self.feed_url:
            return self.feed_url
        return build_feed_url(self.feed)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def is_known_feed(name: str) -> bool:
    """Check a "<level>_<period>" feed name. Pure function."""
    level, _, period = name.rpartition("_")
    return level in FEED_LEVELS and period in FEED_PERIODS


def build_feed_url(name: str) -> str:
    """Build the GeoJSON URL of a named summary feed.

    Pure function.

    Args:
        name: Feed name such as "all_hour" or "2.5_day"

    Returns:
        Feed URL

    Raises:
        ValueError: If the name is not a known feed
    """
    if not is_known_feed(name):
        raise ValueError(f"Unknown feed '{name}'")
    return f"{FEED_BASE_URL}/{name}.geojson"


def load_timezone(name: str | None) -> ZoneInfo | None:
    """Resolve a display timezone name; None means local time.

    Raises:
        ZoneInfoNotFoundError: If the zone does not exist
    """
    if not name:
        return None
    return ZoneInfo(name)


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.feed_url and not is_known_feed(config.feed):
        errors.append(ValidationError(
            field="feed",
            message=(
                f"Unknown feed '{config.feed}', expected <level>_<period> with "
                f"level in {', '.join(FEED_LEVELS)} and period in {', '.join(FEED_PERIODS)}"
            ),
        ))

    if config.feed_url and not config.feed_url.startswith(("http://", "https://")):
        errors.append(ValidationError(
            field="feed_url",
            message=f"Feed URL must be http(s), got '{config.feed_url}'",
        ))

    for name in ("fetch_interval_seconds", "redraw_interval_seconds", "request_timeout_seconds"):
        value = getattr(config, name)
        if value <= 0:
            errors.append(ValidationError(
                field=name,
                message=f"Must be positive, got {value}",
            ))

    if config.redraw_interval_seconds > config.fetch_interval_seconds > 0:
        errors.append(ValidationError(
            field="redraw_interval_seconds",
            message=(
                f"Redraw interval ({config.redraw_interval_seconds}s) is longer "
                f"than fetch interval ({config.fetch_interval_seconds}s)"
            ),
            severity="warning",
        ))

    if config.display_timezone:
        try:
            load_timezone(config.display_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(ValidationError(
                field="display_timezone",
                message=f"Unknown timezone '{config.display_timezone}'",
            ))

    if config.log_level.upper() not in LOG_LEVELS:
        errors.append(ValidationError(
            field="log_level",
            message=f"Unknown log level '{config.log_level}'",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
