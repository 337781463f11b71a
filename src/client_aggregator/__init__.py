"""Aggregate client generator for multi-client Ruby SDKs.

Reads the per-submodule ``ApiClient`` sources of an SDK, extracts every
documented method and renders one aggregate class delegating to them.

Use in pipeline: SourceExtractor → AggregateSpec → AggregateGenerator
"""

from .config import AggregatorConfig
from .errors import (
    AggregatorError,
    ConfigurationError,
    IdentifierCollisionError,
    SourceLoadError,
)
from .extractor import MethodScanner, SourceExtractor, extract
from .generator import AggregateGenerator, generate
from .models import AggregateSpec, ExtractionResult, MethodRecord, SourceUnit
from .pipeline import AggregatorPipeline, generate_aggregator

__all__ = [
    "AggregateGenerator",
    "AggregateSpec",
    "AggregatorConfig",
    "AggregatorError",
    "AggregatorPipeline",
    "ConfigurationError",
    "ExtractionResult",
    "IdentifierCollisionError",
    "MethodRecord",
    "MethodScanner",
    "SourceExtractor",
    "SourceLoadError",
    "SourceUnit",
    "extract",
    "generate",
    "generate_aggregator",
]
