"""CLI command implementations for the aggregator generator."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
import yaml

from client_aggregator.cli.errors import CLIError, cli_error_handler
from client_aggregator.config import AggregatorConfig
from client_aggregator.errors import ConfigurationError
from client_aggregator.logging import setup_logging
from client_aggregator.pipeline import AggregatorPipeline
from client_aggregator.sources import load_source_units

logger = logging.getLogger(__name__)


def load_config(
    command: str,
    config_path: Path | None,
    files: list[Path] | None = None,
    strict_identifiers: bool | None = None,
) -> AggregatorConfig:
    """Load the configuration file, or the defaults, and apply CLI overrides.

    Args:
        command: Name of the CLI command the configuration is loaded for
        config_path: Optional YAML configuration file
        files: Source files overriding the configured list
        strict_identifiers: Override for identifier collision handling

    Returns:
        The effective configuration

    Raises:
        CLIError: If the configuration file is unreadable or invalid

    """
    if config_path is None:
        config = AggregatorConfig()
    else:
        try:
            config = AggregatorConfig.from_yaml_file(config_path)
        except ConfigurationError as e:
            raise CLIError(str(e), command=command, original_error=e) from e
    return config.with_overrides(files=files, strict_identifiers=strict_identifiers)


def generate_command(
    files: list[Path] | None,
    config_path: Path | None,
    output: Path | None,
    strict_identifiers: bool | None = None,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for generating the aggregate client.

    Args:
        files: Source files overriding the configured list
        config_path: Optional YAML configuration file
        output: File to write the result to, stdout if None
        strict_identifiers: Override for identifier collision handling
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("generate", "Aggregator generation failed"):
        config = load_config("generate", config_path, files, strict_identifiers)
        units = load_source_units(config.files)
        source = AggregatorPipeline(config).run(units)

        if output is None:
            typer.echo(source, nl=False)
        else:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(source, encoding="utf-8")
            logger.info("Aggregator written to %s", output)


def extract_command(
    files: list[Path] | None,
    config_path: Path | None,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for dumping extraction results as JSON.

    Identifier collisions are not checked here, so strict mode does not block
    inspecting the files that collide.

    Args:
        files: Source files overriding the configured list
        config_path: Optional YAML configuration file
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("extract", "Extraction failed"):
        config = load_config("extract", config_path, files)
        units = load_source_units(config.files)
        results = AggregatorPipeline(config).extract(units)
        spec = config.build_spec(results)
        typer.echo(spec.model_dump_json(indent=2))


def show_config_command(config_path: Path | None, log_level: str = "INFO") -> None:
    """CLI command implementation for printing the effective configuration.

    Args:
        config_path: Optional YAML configuration file
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("show-config", "Configuration loading failed"):
        config = load_config("show-config", config_path)
        typer.echo(
            yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False),
            nl=False,
        )
