"""Method extraction from Ruby API client sources.

A file is attributed to a submodule by its nested module declarations
(``module Line / module Bot / module V2 / module <Submodule>``). Methods are
found with a line scanner rather than a Ruby parser: every ``def`` line is
recorded together with the comment lines directly above it.
"""

import logging
import re
from collections.abc import Sequence

from client_aggregator.models import ExtractionResult, MethodRecord, SourceUnit

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE: tuple[str, ...] = ("Line", "Bot", "V2")

COMMENT_MARKER = "#"
DEFINITION_MARKER = "def "


def build_submodule_pattern(namespace: Sequence[str]) -> re.Pattern[str]:
    """Compile the pattern capturing the submodule nested inside `namespace`."""
    outer = "".join(rf"module\s{re.escape(name)}\s+" for name in namespace)
    return re.compile(outer + r"module\s(\S+)\s+")


class MethodScanner:
    """Line scanner attaching leading comment blocks to method definitions.

    The only state is the buffer of pending comment lines. A comment line is
    buffered, a ``def`` line takes the buffer, and any other line (blank
    lines included) discards it.
    """

    def __init__(self) -> None:
        """Initialise the scanner with an empty comment buffer."""
        self._pending_docs: list[str] = []

    @property
    def pending_docs(self) -> tuple[str, ...]:
        """Comment lines waiting for a method definition."""
        return tuple(self._pending_docs)

    def feed(self, line: str) -> MethodRecord | None:
        """Consume one source line.

        Args:
            line: Source line without its line terminator

        Returns:
            MethodRecord if the line is a method definition, None otherwise

        """
        stripped = line.strip()
        if stripped.startswith(COMMENT_MARKER):
            self._pending_docs.append(line)
            return None

        if stripped.startswith(DEFINITION_MARKER):
            record = MethodRecord(doc_lines=list(self._pending_docs), signature=stripped)
            self._pending_docs.clear()
            return record

        self._pending_docs.clear()
        return None

    def scan(self, source_text: str) -> list[MethodRecord]:
        """Scan a whole text and return its method records in file order."""
        records: list[MethodRecord] = []
        # Only "\n" ends a line; other separators stay part of the line
        for line in source_text.split("\n"):
            record = self.feed(line.removesuffix("\r"))
            if record is not None:
                records.append(record)
        return records


class SourceExtractor:
    """Extracts the submodule name and documented methods of a client source."""

    def __init__(self, namespace: Sequence[str] = DEFAULT_NAMESPACE) -> None:
        """Initialise the extractor.

        Args:
            namespace: Fixed outer module names enclosing the submodule

        """
        self._namespace = tuple(namespace)
        self._submodule_pattern = build_submodule_pattern(self._namespace)

    @property
    def namespace(self) -> tuple[str, ...]:
        """Outer module names the submodule is nested in."""
        return self._namespace

    def find_submodule(self, source_text: str) -> str | None:
        """Return the submodule declared in `source_text`, if any."""
        match = self._submodule_pattern.search(source_text)
        return match.group(1) if match else None

    def extract(self, source_text: str, file_path: str) -> ExtractionResult | None:
        """Extract the method records of one source file.

        Args:
            source_text: Full text of the file
            file_path: Path used to label diagnostics

        Returns:
            ExtractionResult, or None when the submodule declaration is missing

        """
        submodule_name = self.find_submodule(source_text)
        if submodule_name is None:
            logger.warning(
                "Could not find submodule in %s (expected module nesting %s)",
                file_path,
                " > ".join([*self._namespace, "<Submodule>"]),
            )
            return None

        methods = MethodScanner().scan(source_text)
        for record in methods:
            if not record.has_recognised_signature:
                logger.warning(
                    "Unrecognised method signature in %s, delegating without "
                    "parameters: %s",
                    file_path,
                    record.signature,
                )

        logger.debug(
            "Extracted %d methods for submodule %s from %s",
            len(methods),
            submodule_name,
            file_path,
        )
        return ExtractionResult(
            submodule_name=submodule_name, file_path=file_path, methods=methods
        )

    def extract_unit(self, unit: SourceUnit) -> ExtractionResult | None:
        """Extract the method records of a loaded source unit."""
        return self.extract(unit.source_text, unit.file_path)


def extract(
    source_text: str,
    file_path: str,
    namespace: Sequence[str] = DEFAULT_NAMESPACE,
) -> ExtractionResult | None:
    """Extract one file with a throwaway SourceExtractor."""
    return SourceExtractor(namespace).extract(source_text, file_path)
