"""
Output formatting and export functionality.
"""

from schedule_hours.output.formatter import ConsoleFormatter
from schedule_hours.output.exporter import ResultExporter

__all__ = ["ConsoleFormatter", "ResultExporter"]
