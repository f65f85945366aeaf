"""
Export functionality for working hours results.
"""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from schedule_hours.data.schemas import PublicHoliday, WorkingHoursResult, YearlyWorkingHours

logger = logging.getLogger(__name__)


class ResultExporter:
    """Exports working hours results to JSON and CSV."""

    def __init__(
        self,
        output_directory: str = "results",
        timestamp_format: str = "%Y%m%d_%H%M%S",
    ):
        """
        Initialize the result exporter.

        Args:
            output_directory: Directory for output files.
            timestamp_format: Format string for timestamps in filenames.
        """
        self.output_directory = output_directory
        self.timestamp_format = timestamp_format

    def _resolve_path(self, prefix: str, extension: str, output_path: Optional[str]) -> Path:
        """Use the given path or build a timestamped one in the output directory."""
        if output_path:
            file_path = Path(output_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            return file_path

        output_dir = Path(self.output_directory)
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime(self.timestamp_format)
        return output_dir / f"{prefix}_{timestamp}.{extension}"

    def _write_json(self, data: Dict[str, Any], file_path: Path) -> str:
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.info(f"Exported result to: {file_path}")
        return str(file_path)

    def export_monthly_json(
        self,
        result: WorkingHoursResult,
        year: int,
        month: int,
        output_path: Optional[str] = None,
    ) -> str:
        """
        Export a monthly result to a JSON file.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path(f"hours_{year}_{month:02d}", "json", output_path)
        return self._write_json(self._monthly_to_dict(result, year, month), file_path)

    def export_monthly_csv(
        self,
        result: WorkingHoursResult,
        year: int,
        month: int,
        output_path: Optional[str] = None,
    ) -> str:
        """
        Export a monthly result to a CSV file with one summary row.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path(f"hours_{year}_{month:02d}", "csv", output_path)

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow([
                "Year",
                "Month",
                "Working Days",
                "Weekend Days",
                "Holidays",
                "Working Hours",
            ])
            writer.writerow([
                year,
                month,
                result.total_working_days,
                result.weekends,
                len(result.holidays),
                result.total_working_hours,
            ])

        logger.info(f"Exported result to: {file_path}")
        return str(file_path)

    def export_yearly_json(
        self, result: YearlyWorkingHours, output_path: Optional[str] = None
    ) -> str:
        """Export a yearly summary to a JSON file."""
        file_path = self._resolve_path(f"hours_{result.year}", "json", output_path)
        return self._write_json(result.model_dump(mode="json"), file_path)

    def export_yearly_csv(
        self, result: YearlyWorkingHours, output_path: Optional[str] = None
    ) -> str:
        """Export a yearly summary to CSV, one row per month plus a total row."""
        file_path = self._resolve_path(f"hours_{result.year}", "csv", output_path)

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["Month", "Month Name", "Working Days", "Hours"])
            for month in result.monthly:
                writer.writerow([month.month, month.month_name, month.working_days, month.hours])
            writer.writerow(["", "Total", sum(m.working_days for m in result.monthly), result.total])

        logger.info(f"Exported result to: {file_path}")
        return str(file_path)

    def export_holidays_csv(
        self, holidays: List[PublicHoliday], output_path: Optional[str] = None
    ) -> str:
        """
        Export holidays list to CSV file.

        Args:
            holidays: List of holidays to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path("holidays", "csv", output_path)

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["Date", "Local Name", "Name", "Country"])
            for holiday in holidays:
                writer.writerow([
                    holiday.holiday_date.isoformat(),
                    holiday.local_name,
                    holiday.name or "",
                    holiday.country_code,
                ])

        logger.info(f"Exported holidays to: {file_path}")
        return str(file_path)

    def _monthly_to_dict(self, result: WorkingHoursResult, year: int, month: int) -> dict:
        """
        Convert a monthly result to a JSON-serializable dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "year": year,
            "month": month,
            "calculation": {
                "total_working_days": result.total_working_days,
                "total_working_hours": result.total_working_hours,
                "weekends": result.weekends,
                "holidays_count": len(result.holidays),
            },
            "holidays": [
                {
                    "date": h.holiday_date.isoformat(),
                    "local_name": h.local_name,
                    "name": h.name,
                }
                for h in result.holidays
            ],
            "metadata": {
                "exported_at": datetime.now().isoformat(),
            },
        }
