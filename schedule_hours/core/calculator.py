"""
Working hours calculations: monthly required hours, yearly totals and
hours worked on shifts.
"""

import calendar
from datetime import date, timedelta
from typing import Iterable, List, Optional

from schedule_hours.core.holiday_provider import DEFAULT_COUNTRY, HolidayService
from schedule_hours.data.schemas import (
    FULL_TIME_HOURS,
    Employment,
    EmploymentType,
    MonthlyHours,
    PublicHoliday,
    ShiftInterval,
    WorkingHoursResult,
    YearlyWorkingHours,
)

MONTH_NAMES = {
    "pl": [
        "Styczeń", "Luty", "Marzec", "Kwiecień", "Maj", "Czerwiec",
        "Lipiec", "Sierpień", "Wrzesień", "Październik", "Listopad", "Grudzień",
    ],
    "en": [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
}

EMPLOYMENT_TYPE_LABELS = {
    "pl": {
        EmploymentType.FULL: "Pełny etat",
        EmploymentType.HALF: "½ etatu",
        EmploymentType.CUSTOM: "Niestandardowy",
    },
    "en": {
        EmploymentType.FULL: "Full time",
        EmploymentType.HALF: "Half time",
        EmploymentType.CUSTOM: "Custom",
    },
}


def calculate_working_hours(
    year: int,
    month: int,
    holidays: Iterable[PublicHoliday],
    hours_per_day: float = FULL_TIME_HOURS,
) -> WorkingHoursResult:
    """
    Calculate working days and required hours for a month.

    Saturdays and Sundays count as weekend days even when they are also a
    holiday. A holiday on a weekday removes that day from the working days.

    Args:
        year: Four-digit year.
        month: Month number, 1-12. Not validated.
        holidays: Holidays of the year (or more); filtered to the month here.
        hours_per_day: Required hours for each working day.

    Returns:
        WorkingHoursResult for the month.
    """
    month_holidays = [
        h for h in holidays
        if h.holiday_date.year == year and h.holiday_date.month == month
    ]
    holiday_dates = {h.holiday_date for h in month_holidays}

    working_days = 0
    weekends = 0

    _, days_in_month = calendar.monthrange(year, month)
    current = date(year, month, 1)
    for _ in range(days_in_month):
        if current.weekday() >= 5:
            weekends += 1
        elif current not in holiday_dates:
            working_days += 1
        current += timedelta(days=1)

    return WorkingHoursResult(
        total_working_days=working_days,
        total_working_hours=working_days * hours_per_day,
        holidays=month_holidays,
        weekends=weekends,
    )


def get_required_hours(
    year: int,
    month: int,
    holidays: Iterable[PublicHoliday],
    employment_type: EmploymentType,
    custom_hours: Optional[float] = None,
) -> float:
    """
    Required hours in a month for an employment type.

    Custom employment uses custom_hours when it is positive, otherwise the
    full-time hours.
    """
    employment = Employment(type=employment_type, custom_hours=custom_hours)
    result = calculate_working_hours(year, month, holidays, employment.hours_per_day)
    return result.total_working_hours


def aggregate_yearly_hours(
    year: int,
    holidays: List[PublicHoliday],
    employment_type: EmploymentType,
    custom_hours: Optional[float] = None,
    language: str = "pl",
) -> YearlyWorkingHours:
    """
    Required hours for each month of a year and their total.

    Args:
        year: Four-digit year.
        holidays: Holidays of the year.
        employment_type: Employment type of the employee.
        custom_hours: Daily hours for custom employment.
        language: Language of the month names ('pl' or 'en').

    Returns:
        YearlyWorkingHours with months ordered January to December.
    """
    employment = Employment(type=employment_type, custom_hours=custom_hours)
    month_names = MONTH_NAMES.get(language, MONTH_NAMES["en"])

    monthly = []
    total = 0.0
    for month in range(1, 13):
        hours = get_required_hours(year, month, holidays, employment.type, employment.custom_hours)
        result = calculate_working_hours(year, month, holidays)
        monthly.append(
            MonthlyHours(
                month=month,
                month_name=month_names[month - 1],
                hours=hours,
                working_days=result.total_working_days,
            )
        )
        total += hours

    return YearlyWorkingHours(
        year=year,
        employment_type=employment.type,
        monthly=monthly,
        total=total,
    )


async def calculate_yearly_working_hours(
    year: int,
    employment_type: EmploymentType,
    service: HolidayService,
    custom_hours: Optional[float] = None,
    country_code: str = DEFAULT_COUNTRY,
    language: str = "pl",
) -> YearlyWorkingHours:
    """Fetch the year's holidays once and aggregate the twelve months."""
    holidays = await service.fetch_holidays(year, country_code)
    return aggregate_yearly_hours(year, holidays, employment_type, custom_hours, language)


def _minutes(value) -> int:
    return value.hour * 60 + value.minute


def calculate_worked_hours(shifts: Iterable[ShiftInterval]) -> float:
    """
    Sum the hours worked on a list of shifts, minus their breaks.

    Shifts crossing midnight are not supported; such a shift contributes a
    negative amount.
    """
    total_minutes = 0
    for shift in shifts:
        total_minutes += _minutes(shift.end_time) - _minutes(shift.start_time) - shift.break_minutes
    return total_minutes / 60


def format_hours(hours: float) -> str:
    """Format hours as e.g. '7h 30min', or '8h' for whole hours."""
    if hours < 0:
        return f"-{format_hours(-hours)}"
    whole = int(hours // 1)
    minutes = round((hours - whole) * 60)
    if minutes == 60:
        whole, minutes = whole + 1, 0
    if minutes == 0:
        return f"{whole}h"
    return f"{whole}h {minutes}min"


def employment_type_label(employment_type: EmploymentType, language: str = "pl") -> str:
    """Human readable name of an employment type."""
    labels = EMPLOYMENT_TYPE_LABELS.get(language, EMPLOYMENT_TYPE_LABELS["en"])
    return labels[EmploymentType(employment_type)]
