"""Stdout report adapter.

Prints a mutation report to the terminal with human-readable formatting.
"""

import sys
from typing import TextIO

from bankrules.harness.runner import MutationReport, VariantVerdict


class StdoutReportAdapter:
    """Prints mutation reports with human-readable formatting."""

    def __init__(self, verbose: bool = False, stream: TextIO | None = None):
        """Initialize stdout report adapter.

        Args:
            verbose: If True, list every failed scenario for each variant.
            stream: Output stream. Defaults to sys.stdout at report time.
        """
        self.verbose = verbose
        self.stream = stream

    def report(self, report: MutationReport) -> None:
        """Print the report."""
        stream = self.stream if self.stream is not None else sys.stdout
        print(self.format(report), file=stream)

    def format(self, report: MutationReport) -> str:
        sections = [
            self._format_header(),
            self._format_reference(report),
            self._format_verdicts(report.verdicts),
            self._format_footer(report),
        ]
        return "\n".join(sections)

    @staticmethod
    def _format_header() -> str:
        lines = [
            "=" * 80,
            "MUTATION REPORT",
            "=" * 80,
        ]
        return "\n".join(lines)

    @staticmethod
    def _format_reference(report: MutationReport) -> str:
        result = report.reference
        status = "PASSED" if report.reference_passed else "FAILED"
        lines = [
            f"Reference: {status} ({result.passed}/{result.total} cases)",
        ]
        for name, reason in result.failures:
            lines.append(f"  [FAIL] {name} -> '{reason}'")
        return "\n".join(lines)

    def _format_verdicts(self, verdicts: tuple[VariantVerdict, ...]) -> str:
        lines = [
            "",
            "-" * 80,
            "VARIANTS",
            "-" * 80,
        ]
        if not verdicts:
            lines.append("(none)")
        for verdict in verdicts:
            status = "KILLED" if verdict.killed else "SURVIVED"
            lines.append(f"{status:<9} {verdict.kind:<7} {verdict.name}")
            if self.verbose:
                lines.append(f"          {verdict.description}")
                for name, reason in verdict.result.failures:
                    lines.append(f"          caught by: {name} -> '{reason}'")
        return "\n".join(lines)

    @staticmethod
    def _format_footer(report: MutationReport) -> str:
        lines = [
            "",
            "=" * 80,
            f"Killed {report.killed}/{report.total} -> {report.detection_rate:.1f}%",
        ]
        if report.survivors:
            lines.append(f"Survivors: {', '.join(report.survivors)}")
        lines.append("=" * 80)
        return "\n".join(lines)
