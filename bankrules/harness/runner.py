"""Mutation runner: measures the discriminating power of the specification suite.

Runs the suite against the reference service (which must pass every
scenario) and against each registered variant (each of which should fail
at least one scenario).
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .suite import ServiceFactory, SpecificationSuite, SuiteResult
from .variants import VARIANTS, Variant, VariantKind, reference_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariantVerdict:
    """Outcome of running the suite against one variant."""

    name: str
    kind: VariantKind
    description: str
    result: SuiteResult

    @property
    def killed(self) -> bool:
        return self.result.failed > 0


@dataclass(frozen=True)
class MutationReport:
    """Summary of a full mutation run."""

    reference: SuiteResult
    verdicts: tuple[VariantVerdict, ...]

    @property
    def reference_passed(self) -> bool:
        return self.reference.failed == 0

    @property
    def killed(self) -> int:
        return sum(1 for verdict in self.verdicts if verdict.killed)

    @property
    def total(self) -> int:
        return len(self.verdicts)

    @property
    def survivors(self) -> list[str]:
        return [verdict.name for verdict in self.verdicts if not verdict.killed]

    @property
    def detection_rate(self) -> float:
        """Percentage of variants killed; 100.0 when there are no variants."""
        if not self.verdicts:
            return 100.0
        return self.killed / self.total * 100.0

    @property
    def succeeded(self) -> bool:
        return self.reference_passed and not self.survivors


class MutationRunner:
    """Runs a specification suite against a reference and its variants."""

    def __init__(
        self,
        suite: SpecificationSuite | None = None,
        reference: ServiceFactory = reference_service,
        variants: Iterable[Variant] | None = None,
    ):
        """Initialize the runner.

        Args:
            suite: Suite to run. Defaults to the baseline SpecificationSuite.
            reference: Factory for the service every scenario must pass against.
            variants: Variants to evaluate. Defaults to every registered variant.
        """
        self.suite = suite if suite is not None else SpecificationSuite()
        self.reference = reference
        self.variants = tuple(variants) if variants is not None else tuple(VARIANTS.values())

    def run(self) -> MutationReport:
        reference_result = self.suite.run(self.reference)
        if reference_result.failed:
            logger.error(
                f"Reference failed {reference_result.failed} case(s): "
                f"{', '.join(name for name, _ in reference_result.failures)}"
            )
        else:
            logger.info(f"Reference passed all {reference_result.total} cases")

        verdicts = []
        for variant in self.variants:
            result = self.suite.run(variant.build)
            verdict = VariantVerdict(
                name=variant.name,
                kind=variant.kind,
                description=variant.description,
                result=result,
            )
            logger.info(
                f"{variant.kind.capitalize()}: {variant.name} -> "
                f"{'KILLED' if verdict.killed else 'SURVIVED'}",
                extra={"variant": variant.name, "failed_cases": result.failed},
            )
            verdicts.append(verdict)

        report = MutationReport(reference=reference_result, verdicts=tuple(verdicts))
        logger.info(
            f"Mutation run: killed {report.killed}/{report.total} "
            f"-> {report.detection_rate:.1f}%"
        )
        if report.survivors:
            logger.warning(f"Survivors: {', '.join(report.survivors)}")
        return report
