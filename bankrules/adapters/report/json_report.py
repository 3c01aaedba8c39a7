"""JSON report adapter.

Serializes a mutation report to JSON for CI pipelines and tooling.
"""

import json
import sys
from typing import Any, TextIO

from bankrules.harness.runner import MutationReport
from bankrules.harness.suite import SuiteResult


def _result_to_dict(result: SuiteResult) -> dict[str, Any]:
    return {
        "passed": result.passed,
        "failed": result.failed,
        "failures": [
            {"case": name, "reason": reason} for name, reason in result.failures
        ],
    }


def report_to_dict(report: MutationReport) -> dict[str, Any]:
    """Convert a report into a JSON-serializable dictionary."""
    return {
        "reference": {
            "passed_all": report.reference_passed,
            **_result_to_dict(report.reference),
        },
        "variants": [
            {
                "name": verdict.name,
                "kind": verdict.kind,
                "description": verdict.description,
                "killed": verdict.killed,
                **_result_to_dict(verdict.result),
            }
            for verdict in report.verdicts
        ],
        "killed": report.killed,
        "total": report.total,
        "detection_rate": round(report.detection_rate, 1),
        "survivors": report.survivors,
    }


class JSONReportAdapter:
    """Writes mutation reports as indented JSON."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def report(self, report: MutationReport) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        print(json.dumps(report_to_dict(report), indent=2), file=stream)
