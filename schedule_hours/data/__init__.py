"""
Data models and schemas for the schedule hours engine.
"""

from schedule_hours.data.schemas import (
    CalendarDay,
    Config,
    Employment,
    EmploymentType,
    MonthlyHours,
    PublicHoliday,
    ShiftInterval,
    SpecialDay,
    SpecialDayType,
    WorkingHoursResult,
    YearlyWorkingHours,
)

__all__ = [
    "CalendarDay",
    "Config",
    "Employment",
    "EmploymentType",
    "MonthlyHours",
    "PublicHoliday",
    "ShiftInterval",
    "SpecialDay",
    "SpecialDayType",
    "WorkingHoursResult",
    "YearlyWorkingHours",
]
