"""
Tests for the command line interface.
"""

import json
import logging

import pytest
import yaml
from click.testing import CliRunner

from schedule_hours.cli import main, parse_shift


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def local_config(tmp_path):
    """Config using the offline holiday source and English labels."""
    path = tmp_path / "settings.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "holidays": {"country_code": "PL", "source": "local"},
                "calculation": {"language": "en"},
                "output": {"directory": str(tmp_path / "results")},
            }
        ),
        encoding="utf-8",
    )
    return str(path)


class TestParseShift:
    """Tests for parse_shift."""

    def test_with_break(self):
        shift = parse_shift("09:00-17:00/30")

        assert shift.start_time.hour == 9
        assert shift.end_time.hour == 17
        assert shift.break_minutes == 30

    def test_without_break(self):
        shift = parse_shift("7:30-15:30")

        assert shift.start_time.minute == 30
        assert shift.break_minutes == 0

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid shift"):
            parse_shift("nine to five")


class TestWorkedCommand:
    """Tests for the worked command."""

    def test_two_shifts(self, runner):
        result = runner.invoke(main, ["worked", "-s", "09:00-17:00/30", "-s", "09:00-17:00/30"])

        assert result.exit_code == 0
        assert "15h" in result.output

    def test_invalid_shift(self, runner):
        result = runner.invoke(main, ["worked", "-s", "9-17"])

        assert result.exit_code == 1
        assert "Invalid shift" in result.output

    def test_overnight_warning(self, runner):
        result = runner.invoke(main, ["worked", "-s", "22:00-06:00"])

        assert result.exit_code == 0
        assert "crossing midnight" in result.output

    def test_zero_length_shift_has_no_warning(self, runner):
        result = runner.invoke(main, ["worked", "-s", "09:00-09:00"])

        assert result.exit_code == 0
        assert "crossing midnight" not in result.output
        assert "0h" in result.output


class TestMonthCommand:
    """Tests for the month command."""

    def test_console_output(self, runner, local_config):
        result = runner.invoke(main, ["month", "-y", "2024", "-m", "1", "-c", local_config])

        assert result.exit_code == 0
        assert "January 2024" in result.output
        assert "176h" in result.output

    def test_json_export(self, runner, local_config, tmp_path):
        output = tmp_path / "january.json"
        result = runner.invoke(
            main,
            ["month", "-y", "2024", "-m", "1", "-f", "json", "-o", str(output), "-c", local_config],
        )

        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["calculation"]["total_working_days"] == 22
        assert data["calculation"]["weekends"] == 8
        assert data["calculation"]["total_working_hours"] == 176

    def test_half_time_csv_export(self, runner, local_config, tmp_path):
        output = tmp_path / "january.csv"
        result = runner.invoke(
            main,
            [
                "month", "-y", "2024", "-m", "1", "-t", "half",
                "-f", "csv", "-o", str(output), "-c", local_config,
            ],
        )

        assert result.exit_code == 0
        rows = output.read_text(encoding="utf-8").splitlines()
        assert rows[0].startswith("Year,Month,Working Days")
        assert rows[1] == "2024,1,22,8,2,88.0"

    def test_invalid_month(self, runner, local_config):
        result = runner.invoke(main, ["month", "-y", "2024", "-m", "13", "-c", local_config])
        assert result.exit_code == 2


class TestYearCommand:
    """Tests for the year command."""

    def test_json_export(self, runner, local_config, tmp_path):
        output = tmp_path / "year.json"
        result = runner.invoke(
            main, ["year", "-y", "2024", "-f", "json", "-o", str(output), "-c", local_config]
        )

        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert [m["month"] for m in data["monthly"]] == list(range(1, 13))
        assert data["monthly"][0]["month_name"] == "January"
        assert data["total"] == sum(m["hours"] for m in data["monthly"])

    def test_console_output(self, runner, local_config):
        result = runner.invoke(main, ["year", "-y", "2024", "-c", local_config])

        assert result.exit_code == 0
        assert "Total" in result.output


class TestHolidaysCommand:
    """Tests for the holidays command."""

    def test_csv_export(self, runner, local_config, tmp_path):
        output = tmp_path / "holidays.csv"
        result = runner.invoke(
            main, ["holidays", "-y", "2024", "-o", str(output), "-c", local_config]
        )

        assert result.exit_code == 0
        content = output.read_text(encoding="utf-8")
        assert "2024-01-01" in content
        assert "2024-01-06" in content


class TestCalendarCommand:
    """Tests for the calendar command."""

    def test_marks_trading_sundays(self, runner, local_config):
        result = runner.invoke(main, ["calendar", "-y", "2024", "-m", "1", "-c", local_config])

        assert result.exit_code == 0
        assert "January 2024" in result.output
        assert "Trading Sunday" in result.output
        assert "Working days: 23" in result.output

    def test_without_trading_sundays(self, runner, local_config):
        result = runner.invoke(
            main, ["calendar", "-y", "2024", "-m", "1", "--no-trading-sundays", "-c", local_config]
        )

        assert result.exit_code == 0
        assert "Working days: 22" in result.output


@pytest.fixture
def restore_log_level():
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)


class TestLogLevel:
    """Tests for applying the configured log level."""

    def test_configured_level_is_used(self, runner, tmp_path, restore_log_level):
        path = tmp_path / "settings.yaml"
        path.write_text(
            yaml.safe_dump({"holidays": {"source": "local"}, "logging": {"level": "ERROR"}}),
            encoding="utf-8",
        )

        result = runner.invoke(main, ["holidays", "-y", "2024", "-c", str(path)])

        assert result.exit_code == 0
        assert restore_log_level.level == logging.ERROR

    def test_verbose_wins_over_config(self, runner, tmp_path, restore_log_level):
        path = tmp_path / "settings.yaml"
        path.write_text(
            yaml.safe_dump({"holidays": {"source": "local"}, "logging": {"level": "ERROR"}}),
            encoding="utf-8",
        )

        result = runner.invoke(main, ["-v", "holidays", "-y", "2024", "-c", str(path)])

        assert result.exit_code == 0
        assert restore_log_level.level == logging.DEBUG
