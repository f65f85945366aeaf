"""
CLI interface for schedule hours.
"""

import asyncio
import logging
import re
import sys
from datetime import date
from typing import List, Optional

import click

from schedule_hours import __version__
from schedule_hours.config.manager import ConfigManager
from schedule_hours.core.calendar import get_month_calendar
from schedule_hours.core.calculator import (
    calculate_worked_hours,
    calculate_working_hours,
    calculate_yearly_working_hours,
)
from schedule_hours.core.holiday_provider import create_holiday_service
from schedule_hours.data.schemas import Config, Employment, EmploymentType, ShiftInterval
from schedule_hours.output.exporter import ResultExporter
from schedule_hours.output.formatter import ConsoleFormatter

logger = logging.getLogger(__name__)

SHIFT_PATTERN = re.compile(r"^(\d{1,2}:\d{2})-(\d{1,2}:\d{2})(?:/(\d+))?$")


def setup_logging(level: str) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_config(config_path: Optional[str]) -> Config:
    """
    Load configuration from the given file or the default one.

    Applies the configured log level unless --verbose was given.
    """
    cfg = ConfigManager(config_path).load_config()
    ctx = click.get_current_context(silent=True)
    verbose = ctx is not None and bool((ctx.find_root().obj or {}).get("verbose"))
    if not verbose:
        logging.getLogger().setLevel(getattr(logging, cfg.log_level.upper(), logging.INFO))
    return cfg


def parse_shift(value: str) -> ShiftInterval:
    """
    Parse a shift written as START-END[/BREAK], e.g. 09:00-17:00/30.

    Raises:
        ValueError: If the value does not match the format.
    """
    match = SHIFT_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid shift: {value}. Use HH:MM-HH:MM or HH:MM-HH:MM/BREAK_MINUTES")
    start, end, break_minutes = match.groups()
    return ShiftInterval(
        start_time=start.zfill(5),
        end_time=end.zfill(5),
        break_minutes=int(break_minutes or 0),
    )


def resolve_employment(
    cfg: Config, employment_type: Optional[str], custom_hours: Optional[float]
) -> Employment:
    """Employment from CLI options, falling back to the configured type."""
    if employment_type:
        return Employment(type=EmploymentType(employment_type), custom_hours=custom_hours)
    return Employment(type=cfg.default_employment_type, custom_hours=custom_hours)


employment_options = [
    click.option(
        "--employment-type", "-t",
        type=click.Choice([e.value for e in EmploymentType]),
        default=None,
        help="Employment type (default: from config)",
    ),
    click.option(
        "--custom-hours",
        type=float,
        default=None,
        help="Hours per day for custom employment",
    ),
]


def with_employment_options(func):
    for option in reversed(employment_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="schedule-hours")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging (overrides logging.level)")
@click.pass_context
def main(ctx, verbose):
    """Schedule Hours - holiday-aware working hours for work schedules."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    level = "DEBUG" if verbose else "WARNING"
    setup_logging(level)
    logging.getLogger().setLevel(level)


@main.command()
@click.option("--year", "-y", type=click.IntRange(1900, 2100), default=None, help="Year (default: current year)")
@click.option("--month", "-m", type=click.IntRange(1, 12), default=None, help="Month 1-12 (default: current month)")
@with_employment_options
@click.option("--country", "-C", default=None, help="ISO country code (default: from config)")
@click.option(
    "--format", "-f",
    type=click.Choice(["console", "json", "csv"]),
    default="console",
    help="Output format (default: console)",
)
@click.option("--output", "-o", type=click.Path(), help="Output file path (optional)")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file (optional)")
def month(year, month, employment_type, custom_hours, country, format, output, config):
    """Calculate working days and required hours for a month."""
    formatter = ConsoleFormatter()

    try:
        cfg = load_config(config)
        formatter.language = cfg.language
        today = date.today()
        year = year or today.year
        month = month or today.month
        country_code = (country or cfg.country_code).upper()

        employment = resolve_employment(cfg, employment_type, custom_hours)
        service = create_holiday_service(cfg)
        holidays = asyncio.run(service.fetch_holidays(year, country_code))

        result = calculate_working_hours(year, month, holidays, employment.hours_per_day)

        if format == "console":
            formatter.print_monthly_result(result, year, month, employment.hours_per_day)
        else:
            exporter = ResultExporter(output_directory=cfg.output_directory)
            if format == "json":
                path = exporter.export_monthly_json(result, year, month, output)
            else:
                path = exporter.export_monthly_csv(result, year, month, output)
            formatter.print_success(f"Result saved to {path}")

    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)
    except Exception as e:
        formatter.print_error(f"Unexpected error: {e}")
        logger.exception("Detailed error:")
        sys.exit(1)


@main.command()
@click.option("--year", "-y", type=click.IntRange(1900, 2100), default=None, help="Year (default: current year)")
@with_employment_options
@click.option("--country", "-C", default=None, help="ISO country code (default: from config)")
@click.option(
    "--format", "-f",
    type=click.Choice(["console", "json", "csv"]),
    default="console",
    help="Output format (default: console)",
)
@click.option("--output", "-o", type=click.Path(), help="Output file path (optional)")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file (optional)")
def year(year, employment_type, custom_hours, country, format, output, config):
    """Show required hours for every month of a year."""
    formatter = ConsoleFormatter()

    try:
        cfg = load_config(config)
        formatter.language = cfg.language
        year = year or date.today().year
        country_code = (country or cfg.country_code).upper()

        employment = resolve_employment(cfg, employment_type, custom_hours)
        service = create_holiday_service(cfg)
        result = asyncio.run(
            calculate_yearly_working_hours(
                year,
                employment.type,
                service,
                custom_hours=employment.custom_hours,
                country_code=country_code,
                language=cfg.language,
            )
        )

        if format == "console":
            formatter.print_yearly_result(result)
        else:
            exporter = ResultExporter(output_directory=cfg.output_directory)
            if format == "json":
                path = exporter.export_yearly_json(result, output)
            else:
                path = exporter.export_yearly_csv(result, output)
            formatter.print_success(f"Result saved to {path}")

    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)
    except Exception as e:
        formatter.print_error(f"Unexpected error: {e}")
        logger.exception("Detailed error:")
        sys.exit(1)


@main.command()
@click.option("--year", "-y", type=click.IntRange(1900, 2100), default=None, help="Year (default: current year)")
@click.option("--country", "-C", default=None, help="ISO country code (default: from config)")
@click.option("--output", "-o", type=click.Path(), help="Output CSV file path (optional)")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file (optional)")
def holidays(year, country, output, config):
    """List public holidays for a year and country."""
    formatter = ConsoleFormatter()

    try:
        cfg = load_config(config)
        year = year or date.today().year
        country_code = (country or cfg.country_code).upper()

        service = create_holiday_service(cfg)
        holiday_list = asyncio.run(service.fetch_holidays(year, country_code))

        formatter.print_holidays_for_year(year, country_code, holiday_list)

        if output:
            exporter = ResultExporter(output_directory=cfg.output_directory)
            path = exporter.export_holidays_csv(holiday_list, output)
            formatter.print_success(f"Holidays saved to {path}")

    except Exception as e:
        formatter.print_error(f"Error: {e}")
        sys.exit(1)


@main.command("calendar")
@click.option("--year", "-y", type=click.IntRange(1900, 2100), default=None, help="Year (default: current year)")
@click.option("--month", "-m", type=click.IntRange(1, 12), default=None, help="Month 1-12 (default: current month)")
@click.option("--country", "-C", default=None, help="ISO country code (default: from config)")
@click.option(
    "--no-trading-sundays",
    is_flag=True,
    help="Do not count trading Sundays as working days",
)
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file (optional)")
def calendar_command(year, month, country, no_trading_sundays, config):
    """Show a month with holidays and trading Sundays."""
    formatter = ConsoleFormatter()

    try:
        cfg = load_config(config)
        formatter.language = cfg.language
        today = date.today()
        year = year or today.year
        month = month or today.month
        country_code = (country or cfg.country_code).upper()

        service = create_holiday_service(cfg)
        holiday_list = asyncio.run(service.fetch_holidays(year, country_code))

        days = get_month_calendar(
            year, month, holiday_list, respect_trading_sundays=not no_trading_sundays
        )
        formatter.print_month_calendar(year, month, days)

    except Exception as e:
        formatter.print_error(f"Error: {e}")
        sys.exit(1)


@main.command()
@click.option(
    "--shift", "-s", "shifts",
    multiple=True,
    required=True,
    help="Shift as HH:MM-HH:MM[/BREAK_MINUTES], repeatable",
)
def worked(shifts):
    """Sum the hours worked on a list of shifts."""
    formatter = ConsoleFormatter()

    try:
        intervals: List[ShiftInterval] = [parse_shift(s) for s in shifts]
    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)

    total = calculate_worked_hours(intervals)
    if any(s.end_time < s.start_time for s in intervals):
        formatter.console.print("[yellow]Warning:[/yellow] shifts crossing midnight are not supported")
    formatter.print_worked_hours(intervals, total)


@main.command()
@click.option("--host", "-h", default=None, help="Host to bind to (default: from config or 0.0.0.0)")
@click.option("--port", "-p", type=int, default=None, help="Port to bind to (default: from config or 8000)")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file (optional)")
def serve(host, port, config):
    """Start the FastAPI server."""
    formatter = ConsoleFormatter()

    try:
        import uvicorn

        cfg = load_config(config)

        api_host = host or cfg.api_host
        api_port = port or cfg.api_port

        formatter.console.print(f"Starting API server at http://{api_host}:{api_port}")
        formatter.console.print("Press Ctrl+C to stop")
        formatter.console.print()

        uvicorn.run(
            "schedule_hours.api:app",
            host=api_host,
            port=api_port,
            reload=False,
        )

    except ImportError:
        formatter.print_error("uvicorn is required for the API server. Install it with: pip install uvicorn")
        sys.exit(1)
    except Exception as e:
        formatter.print_error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
