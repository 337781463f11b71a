"""Ruby source generation for the aggregate client.

The output opens the configured modules and the aggregate class, defines a
constructor that builds one sub-client per submodule, re-exposes every
extracted method other than the sub-client constructors as a one-line
delegation, then closes everything again.
"""

import logging

from client_aggregator.identifiers import subclient_identifier
from client_aggregator.models import AggregateSpec, ExtractionResult, MethodRecord

INDENT = "  "

CONSTRUCTOR_DOC_LINES = (
    "# Initialises the aggregator.",
    "# Builds every sub-client.",
    "#",
    "# @param base_url [String] Base URL passed to every sub-client",
    "# @param channel_access_token [String] Channel access token",
    "# @param http_options [Hash] HTTP options passed to every sub-client",
)
CONSTRUCTOR_SIGNATURE = (
    "def initialize(base_url: nil, channel_access_token:, http_options: {})"
)
CONSTRUCTOR_ARGUMENTS = ("base_url", "channel_access_token", "http_options")
CONSTRUCTOR_NAME = "initialize"

logger = logging.getLogger(__name__)


class _SourceBuffer:
    """Accumulates indented lines."""

    def __init__(self, indent: str) -> None:
        self._indent = indent
        self._lines: list[str] = []

    def line(self, depth: int, text: str) -> None:
        self._lines.append(f"{self._indent * depth}{text}")

    def blank(self) -> None:
        self._lines.append("")

    def render(self) -> str:
        return "".join(f"{line}\n" for line in self._lines)


class AggregateGenerator:
    """Renders an AggregateSpec as Ruby source."""

    def __init__(self, indent: str = INDENT) -> None:
        """Initialise the generator.

        Args:
            indent: Text added per nesting level

        """
        self._indent = indent

    def generate(self, spec: AggregateSpec) -> str:
        """Render the aggregate client.

        Args:
            spec: Module path, class name and extraction results to render

        Returns:
            Generated Ruby source, newline terminated

        """
        buffer = _SourceBuffer(self._indent)
        class_depth = len(spec.module_path)

        for depth, module_name in enumerate(spec.module_path):
            buffer.line(depth, f"module {module_name}")
        buffer.line(class_depth, f"class {spec.class_name}")

        self._write_constructor(buffer, spec, class_depth + 1)
        for result in spec.results:
            self._write_delegates(buffer, result, class_depth + 1)

        buffer.line(class_depth, "end")
        for depth in reversed(range(class_depth)):
            buffer.line(depth, "end")

        return buffer.render()

    def _write_constructor(
        self, buffer: _SourceBuffer, spec: AggregateSpec, depth: int
    ) -> None:
        for doc_line in CONSTRUCTOR_DOC_LINES:
            buffer.line(depth, doc_line)
        buffer.line(depth, CONSTRUCTOR_SIGNATURE)

        # A submodule extracted from several files still gets one sub-client.
        for submodule_name in dict.fromkeys(spec.submodule_names):
            identifier = subclient_identifier(submodule_name)
            buffer.line(
                depth + 1, f"{identifier} = {spec.subclient_type(submodule_name)}.new("
            )
            for i, argument in enumerate(CONSTRUCTOR_ARGUMENTS):
                separator = "," if i < len(CONSTRUCTOR_ARGUMENTS) - 1 else ""
                buffer.line(depth + 2, f"{argument}: {argument}{separator}")
            buffer.line(depth + 1, ")")

        buffer.line(depth, "end")
        buffer.blank()

    def _write_delegates(
        self, buffer: _SourceBuffer, result: ExtractionResult, depth: int
    ) -> None:
        identifier = subclient_identifier(result.submodule_name)
        for method in result.methods:
            # The synthesized constructor stays the only initialize
            if method.name == CONSTRUCTOR_NAME:
                logger.warning(
                    "Skipping sub-client constructor in %s: %s",
                    result.file_path,
                    method.signature,
                )
                continue
            self._write_delegate(buffer, method, identifier, depth)

    def _write_delegate(
        self, buffer: _SourceBuffer, method: MethodRecord, identifier: str, depth: int
    ) -> None:
        for doc_line in method.doc_lines:
            buffer.line(depth, doc_line.lstrip())

        name = method.name
        parameters = method.parameter_list
        if parameters:
            buffer.line(depth, f"def {name}({parameters})")
            buffer.line(depth + 1, f"{identifier}.{name}({parameters})")
        else:
            buffer.line(depth, f"def {name}")
            buffer.line(depth + 1, f"{identifier}.{name}")
        buffer.line(depth, "end")
        buffer.blank()


def generate(spec: AggregateSpec) -> str:
    """Render `spec` with the default two-space indentation."""
    return AggregateGenerator().generate(spec)
