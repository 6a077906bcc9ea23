"""Output formatters for period reports."""

from pos_reports.formatters.console import format_currency, format_report_for_console

__all__ = ["format_currency", "format_report_for_console"]
