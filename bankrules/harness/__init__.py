"""Differential test harness.

- suite: the specification suite and its seeded worlds
- variants: mutant rule sets and fault-seeded services
- runner: runs the suite against the reference and every variant
"""

from .runner import MutationReport, MutationRunner, VariantVerdict
from .suite import (
    SpecCase,
    SpecificationSuite,
    SpecWorld,
    SuiteResult,
    build_baseline_cases,
    new_world,
    run_suite,
)
from .variants import VARIANTS, Variant, get_variant, reference_service

__all__ = [
    "VARIANTS",
    "MutationReport",
    "MutationRunner",
    "SpecCase",
    "SpecWorld",
    "SpecificationSuite",
    "SuiteResult",
    "Variant",
    "VariantVerdict",
    "build_baseline_cases",
    "get_variant",
    "new_world",
    "reference_service",
    "run_suite",
]
