"""
Console output formatting using Rich.
"""

import calendar
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from schedule_hours.core.calculator import MONTH_NAMES, employment_type_label, format_hours
from schedule_hours.data.schemas import (
    HALF_TIME_HOURS,
    CalendarDay,
    PublicHoliday,
    ShiftInterval,
    WorkingHoursResult,
    YearlyWorkingHours,
)

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class ConsoleFormatter:
    """Formats output for console display using Rich."""

    def __init__(self, language: str = "pl", console: Optional[Console] = None):
        """
        Initialize the console formatter.

        Args:
            language: Language for month names and labels.
            console: Rich console to print to, a new one if not given.
        """
        self.language = language
        self.console = console or Console()

    def _month_name(self, month: int) -> str:
        return MONTH_NAMES.get(self.language, MONTH_NAMES["en"])[month - 1]

    def print_monthly_result(
        self, result: WorkingHoursResult, year: int, month: int, hours_per_day: float
    ) -> None:
        """
        Print a monthly working hours result.

        Args:
            result: WorkingHoursResult to display.
            year: Year of the result.
            month: Month of the result.
            hours_per_day: Daily hours the result was calculated with.
        """
        self.console.print()
        self.console.rule(f"[bold blue]Working Hours - {self._month_name(month)} {year}[/bold blue]")
        self.console.print()

        _, calendar_days = calendar.monthrange(year, month)

        calc_table = Table(show_header=False, box=None)
        calc_table.add_column("Label", style="cyan", width=22)
        calc_table.add_column("Value", style="white", justify="right", width=12)

        calc_table.add_row("Calendar Days:", str(calendar_days))
        calc_table.add_row("Weekend Days:", f"- {result.weekends}")
        calc_table.add_row("Holidays:", str(len(result.holidays)))
        calc_table.add_row("", "─" * 12)
        calc_table.add_row(
            Text("Working Days:", style="bold green"),
            Text(str(result.total_working_days), style="bold green"),
        )
        calc_table.add_row(
            Text(f"Hours ({format_hours(hours_per_day)}/day):", style="bold green"),
            Text(format_hours(result.total_working_hours), style="bold green"),
        )
        calc_table.add_row(
            f"Half time ({format_hours(HALF_TIME_HOURS)}/day):",
            format_hours(result.total_working_days * HALF_TIME_HOURS),
        )

        self.console.print(Panel(calc_table, title="[bold]Calculation[/bold]"))

        if result.holidays:
            self.print_holidays(result.holidays)

        self.console.print()

    def print_yearly_result(self, result: YearlyWorkingHours) -> None:
        """
        Print a yearly summary, one row per month.

        Args:
            result: YearlyWorkingHours to display.
        """
        self.console.print()
        self.console.rule(
            f"[bold blue]Working Hours {result.year} - "
            f"{employment_type_label(result.employment_type, self.language)}[/bold blue]"
        )
        self.console.print()

        table = Table()
        table.add_column("Month", style="cyan")
        table.add_column("Working Days", justify="right")
        table.add_column("Hours", justify="right", style="white")

        for month in result.monthly:
            table.add_row(month.month_name, str(month.working_days), format_hours(month.hours))

        table.add_section()
        table.add_row(
            Text("Total", style="bold green"),
            Text(str(sum(m.working_days for m in result.monthly)), style="bold green"),
            Text(format_hours(result.total), style="bold green"),
        )

        self.console.print(table)
        self.console.print()

    def print_holidays(self, holidays: List[PublicHoliday]) -> None:
        """
        Print a table of holidays.

        Args:
            holidays: List of holidays to display.
        """
        holiday_table = Table(title="[bold]Holidays in Period[/bold]")
        holiday_table.add_column("Date", style="cyan", width=12)
        holiday_table.add_column("Day", style="dim", width=12)
        holiday_table.add_column("Name", style="white")

        for holiday in holidays:
            holiday_table.add_row(
                holiday.holiday_date.strftime("%d.%m.%Y"),
                WEEKDAY_NAMES[holiday.holiday_date.weekday()],
                holiday.local_name,
            )

        self.console.print(holiday_table)

    def print_holidays_for_year(
        self, year: int, country_code: str, holidays: List[PublicHoliday]
    ) -> None:
        """
        Print all holidays for a year and country.

        Args:
            year: Year.
            country_code: ISO country code.
            holidays: List of holidays.
        """
        self.console.print()
        self.console.rule(f"[bold blue]Holidays {year} - {country_code}[/bold blue]")
        self.console.print()

        if holidays:
            self.print_holidays(holidays)
        else:
            self.console.print("[dim]No holidays found for this period.[/dim]")

        self.console.print()

    def print_month_calendar(self, year: int, month: int, days: List[CalendarDay]) -> None:
        """
        Print every day of a month with its classification.

        Args:
            year: Year of the calendar.
            month: Month of the calendar.
            days: Classified days, first to last.
        """
        self.console.print()
        self.console.rule(f"[bold blue]Calendar - {self._month_name(month)} {year}[/bold blue]")
        self.console.print()

        table = Table()
        table.add_column("Date", style="cyan", width=12)
        table.add_column("Day", style="dim", width=10)
        table.add_column("Working", justify="center")
        table.add_column("Note", style="white")

        for day in days:
            if day.is_public_holiday:
                note = Text(day.holiday_name or "", style="red")
            elif day.is_trading_sunday:
                note = Text("Trading Sunday", style="yellow")
            elif day.is_non_trading_sunday:
                note = Text("Non-trading Sunday", style="dim")
            else:
                note = Text("")
            table.add_row(
                day.day_date.strftime("%d.%m.%Y"),
                WEEKDAY_NAMES[day.day_of_week],
                "[green]yes[/green]" if day.is_working_day else "[dim]no[/dim]",
                note,
            )

        self.console.print(table)
        self.console.print(
            f"[bold green]Working days:[/bold green] {sum(1 for d in days if d.is_working_day)}"
        )
        self.console.print()

    def print_worked_hours(self, shifts: List[ShiftInterval], total: float) -> None:
        """Print shifts and the total hours worked."""
        table = Table(title="[bold]Shifts[/bold]")
        table.add_column("Start", style="cyan")
        table.add_column("End", style="cyan")
        table.add_column("Break", justify="right", style="dim")

        for shift in shifts:
            table.add_row(
                shift.start_time.strftime("%H:%M"),
                shift.end_time.strftime("%H:%M"),
                f"{shift.break_minutes} min",
            )

        self.console.print(table)
        self.console.print(f"[bold green]Worked:[/bold green] {format_hours(total)} ({total:g} h)")

    def print_error(self, message: str) -> None:
        """
        Print an error message.

        Args:
            message: Error message to display.
        """
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def print_success(self, message: str) -> None:
        """
        Print a success message.

        Args:
            message: Success message to display.
        """
        self.console.print(f"[bold green]Success:[/bold green] {message}")
