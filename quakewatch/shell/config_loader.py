"""Configuration Loader - Imperative Shell.

This module handles loading configuration from a YAML file and
environment variables. All I/O is contained here.

The Config model is defined in quakewatch/core/config.py.
"""

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from quakewatch.core.config import Config


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"

# Environment variable -> (Config field, converter)
ENV_OVERRIDES = {
    "QUAKEWATCH_FEED": ("feed", str),
    "QUAKEWATCH_FEED_URL": ("feed_url", str),
    "QUAKEWATCH_FETCH_INTERVAL": ("fetch_interval_seconds", float),
    "QUAKEWATCH_REDRAW_INTERVAL": ("redraw_interval_seconds", float),
    "QUAKEWATCH_TIMEOUT": ("request_timeout_seconds", float),
    "QUAKEWATCH_TIMEZONE": ("display_timezone", str),
    "LOG_LEVEL": ("log_level", str),
    "LOG_FILE": ("log_file", str),
}


class ConfigError(Exception):
    """Configuration could not be read or has invalid values."""


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def load_config_from_dict(data: Mapping[str, Any]) -> Config:
    """Load configuration from a dictionary.

    Pure function. Missing keys keep their defaults.

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object

    Raises:
        ConfigError: If a value has the wrong type
    """
    defaults = Config()

    try:
        return Config(
            feed=str(data.get("feed", defaults.feed)),
            feed_url=_optional_str(data.get("feed_url")),
            fetch_interval_seconds=float(
                data.get("fetch_interval_seconds", defaults.fetch_interval_seconds)
            ),
            redraw_interval_seconds=float(
                data.get("redraw_interval_seconds", defaults.redraw_interval_seconds)
            ),
            request_timeout_seconds=float(
                data.get("request_timeout_seconds", defaults.request_timeout_seconds)
            ),
            display_timezone=_optional_str(data.get("display_timezone")),
            log_level=str(data.get("log_level", defaults.log_level)).upper(),
            log_file=_optional_str(data.get("log_file")),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration value: {e}") from e


def apply_env_overrides(
    config: Config,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Return a copy of config with environment overrides applied.

    Args:
        config: Base configuration
        environ: Environment mapping (defaults to os.environ)

    Returns:
        New Config object

    Raises:
        ConfigError: If an override cannot be converted
    """
    if environ is None:
        environ = os.environ

    data = dict(vars(config))
    for var, (field_name, convert) in ENV_OVERRIDES.items():
        raw = environ.get(var)
        if raw is None or raw == "":
            continue
        try:
            data[field_name] = convert(raw)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {var}: {raw!r}") from e
        logger.debug("Config %s overridden by %s", field_name, var)

    data["log_level"] = str(data["log_level"]).upper()
    return Config(**data)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file plus environment overrides.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses QUAKEWATCH_CONFIG env var or default.

    Returns:
        Parsed Config object

    Raises:
        ConfigError: If the file is not valid YAML or has bad values
    """
    if config_path is None:
        config_path = os.environ.get("QUAKEWATCH_CONFIG", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    if not path.exists():
        logger.debug("Config file not found: %s, using defaults", path)
        return apply_env_overrides(Config())

    logger.info("Loading configuration from %s", path)

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return apply_env_overrides(Config())

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    return apply_env_overrides(load_config_from_dict(data))
