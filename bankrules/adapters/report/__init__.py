"""Mutation report adapters."""

from .json_report import JSONReportAdapter, report_to_dict
from .stdout import StdoutReportAdapter

__all__ = ["JSONReportAdapter", "StdoutReportAdapter", "report_to_dict"]
