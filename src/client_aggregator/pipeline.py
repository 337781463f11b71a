"""End-to-end generation: extract every source unit, then render the aggregate.

Pipeline: SourceUnit → SourceExtractor → ExtractionResult → AggregateSpec
→ AggregateGenerator → Ruby source text
"""

import logging
from collections.abc import Iterable

from client_aggregator.config import AggregatorConfig
from client_aggregator.errors import IdentifierCollisionError
from client_aggregator.extractor import SourceExtractor
from client_aggregator.generator import AggregateGenerator
from client_aggregator.identifiers import find_identifier_collisions
from client_aggregator.models import AggregateSpec, ExtractionResult, SourceUnit

logger = logging.getLogger(__name__)


class AggregatorPipeline:
    """Runs extraction and generation for one configuration."""

    def __init__(
        self,
        config: AggregatorConfig,
        extractor: SourceExtractor | None = None,
        generator: AggregateGenerator | None = None,
    ) -> None:
        """Initialise the pipeline.

        Args:
            config: Generation settings
            extractor: Extractor to use, built from the config namespace if None
            generator: Generator to use, default indentation if None

        """
        self._config = config
        self._extractor = extractor or SourceExtractor(config.submodule_namespace)
        self._generator = generator or AggregateGenerator()

    def extract(self, units: Iterable[SourceUnit]) -> list[ExtractionResult]:
        """Extract every unit in order, skipping units without a submodule."""
        results: list[ExtractionResult] = []
        skipped = 0
        for unit in units:
            result = self._extractor.extract_unit(unit)
            if result is None:
                skipped += 1
                continue
            results.append(result)

        logger.info(
            "Extracted %d methods from %d files (%d skipped)",
            sum(len(result.methods) for result in results),
            len(results),
            skipped,
        )
        return results

    def build_spec(self, results: list[ExtractionResult]) -> AggregateSpec:
        """Build the aggregate spec, checking sub-client identifiers.

        Raises:
            IdentifierCollisionError: If identifiers collide in strict mode

        """
        collisions = find_identifier_collisions(r.submodule_name for r in results)
        if collisions:
            if self._config.strict_identifiers:
                raise IdentifierCollisionError(collisions)
            for identifier, names in collisions.items():
                logger.warning(
                    "Submodules %s share the sub-client identifier %s",
                    names,
                    identifier,
                )
        return self._config.build_spec(results)

    def run(self, units: Iterable[SourceUnit]) -> str:
        """Generate the aggregate client source for `units`."""
        spec = self.build_spec(self.extract(units))
        return self._generator.generate(spec)


def generate_aggregator(
    units: Iterable[SourceUnit], config: AggregatorConfig | None = None
) -> str:
    """Generate the aggregate client source with a one-off pipeline."""
    return AggregatorPipeline(config or AggregatorConfig()).run(units)
