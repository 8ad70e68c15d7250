"""gridmeasures/reporting — human-readable reports for index results."""

from gridmeasures.reporting.formatter import format_matrix, format_report

__all__ = ["format_matrix", "format_report"]
