"""Data models for extraction results and the aggregate to generate."""

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from client_aggregator.signature import parse_signature

SUBMODULE_PLACEHOLDER = "{submodule}"


def validate_subclient_type_template(template: str) -> str:
    """Ensure a sub-client type template interpolates only the submodule name.

    Raises:
        ValueError: If the placeholder is missing or the template is malformed

    """
    if SUBMODULE_PLACEHOLDER not in template:
        raise ValueError(
            f"Sub-client type template must contain {SUBMODULE_PLACEHOLDER}"
        )
    try:
        template.format(submodule="Submodule")
    except (KeyError, IndexError, ValueError) as e:
        raise ValueError(f"Invalid sub-client type template: {e}") from e
    return template


class SourceUnit(BaseModel):
    """Raw text of one input file together with its path."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    source_text: str


class MethodRecord(BaseModel):
    """A method definition line and the comment block directly above it."""

    model_config = ConfigDict(frozen=True)

    doc_lines: list[str] = Field(default_factory=list)
    signature: str

    @computed_field
    @property
    def name(self) -> str:
        """Method name taken from the signature."""
        return parse_signature(self.signature).name

    @computed_field
    @property
    def parameter_list(self) -> str:
        """Parameter text between the parentheses, empty if there are none."""
        return parse_signature(self.signature).parameter_list

    @property
    def has_recognised_signature(self) -> bool:
        """Whether the signature matched one of the known `def` shapes."""
        return parse_signature(self.signature).recognised


class ExtractionResult(BaseModel):
    """Methods extracted from one file, keyed by the owning submodule."""

    model_config = ConfigDict(frozen=True)

    submodule_name: str = Field(min_length=1)
    file_path: str
    methods: list[MethodRecord] = Field(default_factory=list)


class AggregateSpec(BaseModel):
    """Everything the generator needs to emit the aggregate client."""

    model_config = ConfigDict(frozen=True)

    module_path: list[str] = Field(
        description="Enclosing module names, outermost first"
    )
    class_name: str = Field(min_length=1, description="Aggregate class name")
    subclient_type_template: str = Field(
        description="Fully qualified sub-client type with a {submodule} placeholder"
    )
    results: list[ExtractionResult] = Field(default_factory=list)

    @field_validator("subclient_type_template")
    @classmethod
    def validate_template(cls, template: str) -> str:
        """Ensure the template interpolates exactly the submodule name."""
        return validate_subclient_type_template(template)

    @property
    def submodule_names(self) -> list[str]:
        """Submodule names in input order, one per extraction result."""
        return [result.submodule_name for result in self.results]

    def subclient_type(self, submodule_name: str) -> str:
        """Fully qualified sub-client type for a submodule."""
        return self.subclient_type_template.format(submodule=submodule_name)
