"""CLI output formatters."""

from .report_formatter import HostListFormatter, ReportFormatter

__all__ = ["HostListFormatter", "ReportFormatter"]
