"""Error classes for the client aggregator generator.

This module provides:
- AggregatorError: Base exception class for all generator errors
- ConfigurationError: Invalid or unreadable generator configuration
- SourceLoadError: Input source file cannot be read
- IdentifierCollisionError: Submodules folding to the same sub-client identifier
"""


class AggregatorError(Exception):
    """Base exception for all client aggregator errors."""

    pass


class ConfigurationError(AggregatorError):
    """Raised when generator configuration is invalid."""

    pass


class SourceLoadError(AggregatorError):
    """Raised when an input source file cannot be read."""

    pass


class IdentifierCollisionError(AggregatorError):
    """Raised when distinct submodules map to the same sub-client identifier."""

    def __init__(self, collisions: dict[str, list[str]]) -> None:
        """Initialise with the colliding identifiers.

        Args:
            collisions: Mapping of sub-client identifier to the submodule
                names that fold onto it

        """
        self.collisions = collisions
        details = ", ".join(
            f"{identifier} <- {names}" for identifier, names in collisions.items()
        )
        super().__init__(f"Sub-client identifier collision: {details}")
