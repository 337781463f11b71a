"""Loading of client source files into SourceUnits."""

import logging
from collections.abc import Iterable
from pathlib import Path

from client_aggregator.errors import SourceLoadError
from client_aggregator.models import SourceUnit

logger = logging.getLogger(__name__)

_DEFAULT_ENCODING = "utf-8"


def load_source_unit(path: Path, encoding: str = _DEFAULT_ENCODING) -> SourceUnit:
    """Read one source file.

    Args:
        path: File to read
        encoding: Text encoding of the file

    Returns:
        SourceUnit holding the file path and its text

    Raises:
        SourceLoadError: If the file cannot be read or decoded

    """
    try:
        source_text = path.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise SourceLoadError(f"Failed to decode source file {path}: {e}") from e
    except OSError as e:
        raise SourceLoadError(f"Failed to read source file {path}: {e}") from e

    logger.debug("Loaded %s (%d bytes)", path, len(source_text.encode(encoding)))
    return SourceUnit(file_path=str(path), source_text=source_text)


def load_source_units(
    paths: Iterable[Path], encoding: str = _DEFAULT_ENCODING
) -> list[SourceUnit]:
    """Read source files in the given order."""
    return [load_source_unit(path, encoding) for path in paths]
