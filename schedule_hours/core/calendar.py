"""
Polish retail calendar: trading Sundays and day classification.

Trading Sundays (niedziele handlowe) are the Sundays on which shops may
open: the Sunday before Easter, the last Sunday of January, April, June and
August, and the two Sundays before Christmas. Functions here that classify
working days treat a trading Sunday as a working day unless told otherwise,
unlike the office-hours calculator.
"""

import calendar
from datetime import date, timedelta
from typing import Iterator, List, Optional

from dateutil.easter import easter

from schedule_hours.core.holiday_provider import find_holiday
from schedule_hours.data.schemas import CalendarDay, PublicHoliday, SpecialDay, SpecialDayType

SATURDAY = 5
SUNDAY = 6

TRADING_SUNDAY_MONTHS = (1, 4, 6, 8)

TRADING_SUNDAY_NAME = "Niedziela handlowa"
NON_TRADING_SUNDAY_NAME = "Niedziela niehandlowa"
DEFAULT_HOLIDAY_NAME = "Święto"


def _sunday_on_or_before(day: date) -> date:
    return day - timedelta(days=(day.weekday() - SUNDAY) % 7)


def _each_day(start: date, end: date) -> Iterator[date]:
    if end < start:
        raise ValueError(f"Start date {start} is after end date {end}")
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def get_trading_sundays(year: int) -> List[date]:
    """
    Trading Sundays of a year, in date order.

    Args:
        year: Four-digit year.

    Returns:
        Seven dates: Palm Sunday, the last Sundays of January, April, June
        and August, and the two Sundays before Christmas Day.
    """
    sundays = [easter(year) - timedelta(days=7)]

    for month in TRADING_SUNDAY_MONTHS:
        _, last_day = calendar.monthrange(year, month)
        sundays.append(_sunday_on_or_before(date(year, month, last_day)))

    # Christmas Eve bound so a Sunday Christmas Day is not counted
    before_christmas = _sunday_on_or_before(date(year, 12, 24))
    sundays.append(before_christmas - timedelta(days=7))
    sundays.append(before_christmas)

    return sorted(sundays)


def is_trading_sunday(day: date) -> bool:
    """Check whether a date is a trading Sunday."""
    return day.weekday() == SUNDAY and day in get_trading_sundays(day.year)


def is_non_trading_sunday(day: date) -> bool:
    """Check whether a date is a Sunday on which shops stay closed."""
    return day.weekday() == SUNDAY and not is_trading_sunday(day)


def is_working_day(
    day: date,
    holiday_list: List[PublicHoliday],
    respect_trading_sundays: bool = True,
) -> bool:
    """
    Check whether a date is a working day.

    Public holidays and Saturdays are never working days. A Sunday is one
    only when it is a trading Sunday and trading Sundays are respected.

    Args:
        day: Date to classify.
        holiday_list: Public holidays covering the date's year.
        respect_trading_sundays: Count trading Sundays as working days.
    """
    if find_holiday(day, holiday_list) is not None:
        return False
    if day.weekday() == SATURDAY:
        return False
    if day.weekday() == SUNDAY:
        return respect_trading_sundays and is_trading_sunday(day)
    return True


def count_working_days(
    start: date,
    end: date,
    holiday_list: List[PublicHoliday],
    respect_trading_sundays: bool = True,
) -> int:
    """
    Count working days between two dates, both included.

    Raises:
        ValueError: If start is after end.
    """
    return sum(
        1 for day in _each_day(start, end)
        if is_working_day(day, holiday_list, respect_trading_sundays)
    )


def get_special_days(
    start: date, end: date, holiday_list: List[PublicHoliday]
) -> List[SpecialDay]:
    """
    Public holidays and Sundays between two dates, both included.

    A Sunday that is also a public holiday is reported as the holiday.

    Raises:
        ValueError: If start is after end.
    """
    special_days = []
    for day in _each_day(start, end):
        holiday = find_holiday(day, holiday_list)
        if holiday is not None:
            special_days.append(
                SpecialDay(
                    date=day,
                    name=holiday.local_name or DEFAULT_HOLIDAY_NAME,
                    type=SpecialDayType.PUBLIC,
                )
            )
        elif is_trading_sunday(day):
            special_days.append(
                SpecialDay(date=day, name=TRADING_SUNDAY_NAME, type=SpecialDayType.TRADING_SUNDAY)
            )
        elif day.weekday() == SUNDAY:
            special_days.append(
                SpecialDay(
                    date=day, name=NON_TRADING_SUNDAY_NAME, type=SpecialDayType.NON_TRADING_SUNDAY
                )
            )
    return special_days


def get_month_calendar(
    year: int,
    month: int,
    holiday_list: List[PublicHoliday],
    respect_trading_sundays: bool = True,
) -> List[CalendarDay]:
    """
    Every day of a month with its classification.

    Args:
        year: Four-digit year.
        month: Month number, 1-12.
        holiday_list: Public holidays of the year.
        respect_trading_sundays: Count trading Sundays as working days.

    Returns:
        One CalendarDay per day, first to last.
    """
    _, days_in_month = calendar.monthrange(year, month)
    days = []
    for day in _each_day(date(year, month, 1), date(year, month, days_in_month)):
        holiday: Optional[PublicHoliday] = find_holiday(day, holiday_list)
        days.append(
            CalendarDay(
                date=day,
                day_of_month=day.day,
                day_of_week=day.weekday(),
                is_weekend=day.weekday() >= SATURDAY,
                is_public_holiday=holiday is not None,
                holiday_name=holiday.local_name if holiday else None,
                is_trading_sunday=is_trading_sunday(day),
                is_non_trading_sunday=is_non_trading_sunday(day),
                is_working_day=is_working_day(day, holiday_list, respect_trading_sundays),
            )
        )
    return days
