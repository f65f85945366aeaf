"""
Core business logic for working hours calculation.
"""

from schedule_hours.core.calendar import (
    count_working_days,
    get_month_calendar,
    get_special_days,
    get_trading_sundays,
    is_non_trading_sunday,
    is_trading_sunday,
    is_working_day,
)
from schedule_hours.core.calculator import (
    aggregate_yearly_hours,
    calculate_worked_hours,
    calculate_working_hours,
    calculate_yearly_working_hours,
    get_required_hours,
)
from schedule_hours.core.holiday_provider import (
    FileHolidayCache,
    HolidayProviderError,
    HolidayService,
    InMemoryHolidayCache,
    LocalHolidayProvider,
    NagerHolidayProvider,
)

__all__ = [
    "FileHolidayCache",
    "HolidayProviderError",
    "HolidayService",
    "InMemoryHolidayCache",
    "LocalHolidayProvider",
    "NagerHolidayProvider",
    "aggregate_yearly_hours",
    "calculate_worked_hours",
    "calculate_working_hours",
    "calculate_yearly_working_hours",
    "count_working_days",
    "get_month_calendar",
    "get_required_hours",
    "get_special_days",
    "get_trading_sundays",
    "is_non_trading_sunday",
    "is_trading_sunday",
    "is_working_day",
]
