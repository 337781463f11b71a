"""CLI command implementations for the aggregator generator."""

from client_aggregator.cli.commands import (
    extract_command,
    generate_command,
    show_config_command,
)
from client_aggregator.cli.errors import CLIError

__all__ = [
    "CLIError",
    "extract_command",
    "generate_command",
    "show_config_command",
]
