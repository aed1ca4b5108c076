"""Run reporting for NegativeGuard."""

from negativeguard.reports.base import AuditReporter, LoggingReporter
from negativeguard.reports.csv_export import export_decisions_csv

__all__ = ["AuditReporter", "LoggingReporter", "export_decisions_csv"]
