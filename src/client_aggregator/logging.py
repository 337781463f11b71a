"""Python-standard logging configuration for the aggregator generator.

Logging is set up with logging.config.dictConfig() from YAML files shipped in
the package's resources directory. All handlers write to stderr so standard
output only ever carries generated source.
"""

from __future__ import annotations

import logging
import logging.config
import os
import sys
from importlib.resources import files
from pathlib import Path
from typing import Any, cast

import yaml

ENVIRONMENT_VARIABLE = "CLIENT_AGGREGATOR_ENV"

_ENVIRONMENT_ALIASES = {
    "dev": "dev",
    "development": "dev",
    "test": "test",
    "prod": "prod",
    "production": "prod",
}


class LoggingError(Exception):
    """Exception raised for logging configuration errors."""

    pass


def get_config_dir() -> Path:
    """Return the directory holding the packaged logging configurations."""
    return Path(str(files("client_aggregator") / "resources"))


def get_config_path(
    config_name: str | None = None, environment: str | None = None
) -> Path:
    """Get the path to a logging configuration file.

    Args:
        config_name: Name of config file (without extension)
        environment: Environment (dev, test, prod) for environment-specific configs

    Returns:
        Path to the logging configuration file

    Raises:
        LoggingError: If no suitable configuration file is found

    """
    config_dir = get_config_dir()

    if config_name:
        config_file = f"{config_name}.yaml"
    else:
        env = (environment or os.getenv(ENVIRONMENT_VARIABLE, "")).lower()
        if env in _ENVIRONMENT_ALIASES:
            config_file = f"logging-{_ENVIRONMENT_ALIASES[env]}.yaml"
        else:
            config_file = "logging.yaml"

    config_path = config_dir / config_file

    # Environments without a dedicated file share the default one
    if not config_path.exists() and config_file != "logging.yaml":
        config_path = config_dir / "logging.yaml"

    if not config_path.exists():
        raise LoggingError(
            f"No logging configuration found. Expected at: {config_path}"
        )

    return config_path


def load_config(config_path: Path) -> dict[str, Any]:
    """Load logging configuration from YAML file.

    Raises:
        LoggingError: If configuration cannot be loaded or parsed

    """
    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LoggingError(f"Failed to parse YAML config {config_path}: {e}") from e
    except OSError as e:
        raise LoggingError(f"Failed to read config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise LoggingError(f"Invalid configuration format in {config_path}")

    return cast(dict[str, Any], config)


def _apply_level_override(config: dict[str, Any], level: str) -> None:
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise LoggingError(f"Invalid log level: {level}")

    level = level.upper()
    for logger_name in config.get("loggers", {}):
        config["loggers"][logger_name]["level"] = level

    if "root" in config:
        config["root"]["level"] = level

    # Handlers filter below their own level, so only ever lower them
    for handler_name, handler_config in config.get("handlers", {}).items():
        if isinstance(handler_config, dict) and "level" in handler_config:
            handler_level_str = cast(str, handler_config["level"])
            current_handler_level = getattr(logging, handler_level_str, logging.INFO)
            if numeric_level < current_handler_level:
                config["handlers"][handler_name]["level"] = level


def setup_logging(
    config_path: Path | str | None = None,
    level: str | None = None,
    environment: str | None = None,
    force_basic: bool = False,
) -> None:
    """Configure logging using Python standard dictConfig.

    Any configuration error falls back to basic console logging on stderr.

    Args:
        config_path: Path to logging configuration file
        level: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: Environment for config selection (dev, test, prod)
        force_basic: Force basic console logging (fallback mode)

    """
    if force_basic:
        _setup_basic_logging(level or "INFO")
        return

    try:
        if isinstance(config_path, str):
            config_path = Path(config_path)
        elif config_path is None:
            config_path = get_config_path(environment=environment)

        config = load_config(config_path)
        if level:
            _apply_level_override(config, level)

        logging.config.dictConfig(config)
        logging.getLogger(__name__).debug("Logging configured from: %s", config_path)

    except (LoggingError, ImportError, KeyError, ValueError, TypeError) as e:
        fallback_level = level or "INFO"
        _setup_basic_logging(fallback_level)

        logging.getLogger(__name__).warning(
            "Failed to configure logging from file (%s), using basic console logging at %s level",
            e,
            fallback_level,
        )


def _setup_basic_logging(level: str) -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
