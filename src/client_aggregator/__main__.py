"""Main entry point for the client aggregator generator.

Commands:
- generate: Render the aggregate client from the configured source files
- extract: Dump the extracted submodules and methods as JSON
- show-config: Print the effective configuration
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from client_aggregator.cli import (
    extract_command,
    generate_command,
    show_config_command,
)

# Environment (e.g. CLIENT_AGGREGATOR_ENV) from the working directory's .env
load_dotenv(Path.cwd() / ".env")

app = typer.Typer(name="client-aggregator")

FilesArgument = Annotated[
    list[Path] | None,
    typer.Argument(
        help="Client source files, in output order (overrides the configured list)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        show_default=False,
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML configuration file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        case_sensitive=False,
    ),
]


@app.command()
def generate(
    files: FilesArgument = None,
    config: ConfigOption = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the generated source to this file instead of stdout",
            file_okay=True,
            dir_okay=False,
            writable=True,
        ),
    ] = None,
    strict_identifiers: Annotated[
        bool,
        typer.Option(
            "--strict-identifiers",
            help="Fail when submodules differing only in case share a sub-client",
        ),
    ] = False,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Generate the aggregate client.

    Example:
        client-aggregator generate lib/line/bot/v2/*/api/*_client.rb -o all_in_one.rb

    """
    generate_command(files, config, output, strict_identifiers or None, log_level)


@app.command()
def extract(
    files: FilesArgument = None,
    config: ConfigOption = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Print the extracted submodules and methods as JSON."""
    extract_command(files, config, log_level)


@app.command(name="show-config")
def show_config(
    config: ConfigOption = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Print the effective configuration as YAML."""
    show_config_command(config, log_level)


if __name__ == "__main__":
    app()
