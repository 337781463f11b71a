"""Configuration for the aggregator generator with Pydantic validation.

The defaults reproduce the LINE Bot SDK setup: the Messaging API clients
under ``Line::Bot::V2`` are aggregated into ``Line::Bot::V2::AllInOne::ApiClient``.
Configuration can also be loaded from a YAML file::

    module_path: [Line, Bot, V2, AllInOne]
    class_name: ApiClient
    submodule_namespace: [Line, Bot, V2]
    subclient_type_template: "::Line::Bot::V2::{submodule}::ApiClient"
    files:
      - lib/line/bot/v2/messaging_api/api/messaging_api_client.rb
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from client_aggregator.errors import ConfigurationError
from client_aggregator.extractor import DEFAULT_NAMESPACE
from client_aggregator.models import (
    SUBMODULE_PLACEHOLDER,
    AggregateSpec,
    ExtractionResult,
    validate_subclient_type_template,
)

logger = logging.getLogger(__name__)

DEFAULT_MODULE_PATH: tuple[str, ...] = ("Line", "Bot", "V2", "AllInOne")
DEFAULT_CLASS_NAME = "ApiClient"
DEFAULT_SUBCLIENT_TYPE_TEMPLATE = "::Line::Bot::V2::{submodule}::ApiClient"
DEFAULT_FILES: tuple[str, ...] = (
    "./lib/line/bot/v2/messaging_api/api/messaging_api_client.rb",
    "./lib/line/bot/v2/messaging_api/api/messaging_api_blob_client.rb",
)

_CONSTANT_NAME_PATTERN = r"^[A-Z][A-Za-z0-9_]*$"


def _validate_constant_names(names: list[str]) -> list[str]:
    invalid = [name for name in names if not re.match(_CONSTANT_NAME_PATTERN, name)]
    if invalid:
        raise ValueError(f"Module names must be Ruby constant names: {invalid}")
    return names


class AggregatorConfig(BaseModel):
    """Settings for one generation run."""

    module_path: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MODULE_PATH),
        description="Modules enclosing the aggregate class, outermost first",
    )
    class_name: str = Field(
        default=DEFAULT_CLASS_NAME,
        pattern=_CONSTANT_NAME_PATTERN,
        description="Name of the generated aggregate class",
    )
    submodule_namespace: list[str] = Field(
        default_factory=lambda: list(DEFAULT_NAMESPACE),
        description="Fixed outer modules that enclose each sub-client submodule",
    )
    subclient_type_template: str = Field(
        default=DEFAULT_SUBCLIENT_TYPE_TEMPLATE,
        description=f"Fully qualified sub-client type, {SUBMODULE_PLACEHOLDER} is "
        "replaced by the submodule name",
    )
    files: list[Path] = Field(
        default_factory=lambda: [Path(path) for path in DEFAULT_FILES],
        description="Client source files to aggregate, in output order",
    )
    strict_identifiers: bool = Field(
        default=False,
        description="Fail instead of warning when submodules share an identifier",
    )

    @field_validator("module_path", "submodule_namespace")
    @classmethod
    def validate_module_names(cls, names: list[str]) -> list[str]:
        """Validate that module names are Ruby constants."""
        return _validate_constant_names(names)

    @field_validator("subclient_type_template")
    @classmethod
    def validate_template(cls, template: str) -> str:
        """Validate the template the same way AggregateSpec does."""
        return validate_subclient_type_template(template)

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a raw properties mapping.

        Args:
            properties: Raw configuration values

        Returns:
            Validated configuration object

        Raises:
            ConfigurationError: If validation fails

        """
        try:
            return cls.model_validate(properties)
        except ValidationError as e:
            error_details: list[str] = []
            for error in e.errors():
                location = (
                    " -> ".join(str(part) for part in error["loc"])
                    if error["loc"]
                    else "root"
                )
                error_details.append(f"  {location}: {error['msg']}")
            raise ConfigurationError(
                "Invalid aggregator configuration:\n" + "\n".join(error_details)
            ) from e

    @classmethod
    def from_yaml_file(cls, config_path: Path) -> Self:
        """Load configuration from a YAML file.

        Relative entries in ``files`` are resolved against the directory that
        contains the configuration file.

        Raises:
            ConfigurationError: If the file cannot be read, parsed or validated

        """
        logger.debug("Loading configuration from: %s", config_path)
        try:
            with open(config_path, encoding="utf-8") as f:
                raw_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Failed to parse YAML config {config_path}: {e}"
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read config file {config_path}: {e}"
            ) from e

        if raw_data is None:
            raw_data = {}
        if not isinstance(raw_data, dict):
            raise ConfigurationError(f"Invalid configuration format in {config_path}")

        config = cls.from_properties(raw_data)
        base_dir = config_path.parent
        return config.model_copy(
            update={
                "files": [
                    path if path.is_absolute() else base_dir / path
                    for path in config.files
                ]
            }
        )

    def with_overrides(
        self,
        files: list[Path] | None = None,
        strict_identifiers: bool | None = None,
    ) -> AggregatorConfig:
        """Return a copy with command line overrides applied."""
        update: dict[str, Any] = {}
        if files:
            update["files"] = list(files)
        if strict_identifiers is not None:
            update["strict_identifiers"] = strict_identifiers
        return self.model_copy(update=update)

    def build_spec(self, results: list[ExtractionResult]) -> AggregateSpec:
        """Build the generation target for `results`."""
        return AggregateSpec(
            module_path=self.module_path,
            class_name=self.class_name,
            subclient_type_template=self.subclient_type_template,
            results=results,
        )
