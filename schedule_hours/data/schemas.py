"""
Data models for the schedule hours engine using Pydantic.
"""

from datetime import date, time
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

FULL_TIME_HOURS = 8.0
HALF_TIME_HOURS = 4.0


class EmploymentType(str, Enum):
    """Contracted working time of an employee."""

    FULL = "full"
    HALF = "half"
    CUSTOM = "custom"


class Employment(BaseModel):
    """Employment type together with the optional custom daily hours."""

    type: EmploymentType = Field(default=EmploymentType.FULL, description="Employment type")
    custom_hours: Optional[float] = Field(
        default=None, description="Hours per day for custom employment"
    )

    @property
    def hours_per_day(self) -> float:
        """Daily hours for this employment, falling back to full time."""
        if self.type == EmploymentType.HALF:
            return HALF_TIME_HOURS
        if self.type == EmploymentType.CUSTOM and self.custom_hours and self.custom_hours > 0:
            return float(self.custom_hours)
        return FULL_TIME_HOURS


class PublicHoliday(BaseModel):
    """A public holiday as returned by the holiday data service."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    holiday_date: date = Field(..., alias="date", description="Date of the holiday")
    local_name: str = Field(..., alias="localName", description="Name in the local language")
    country_code: str = Field(default="", alias="countryCode", description="ISO-3166 alpha-2 code")
    name: Optional[str] = Field(default=None, description="English name")


class WorkingHoursResult(BaseModel):
    """Breakdown of a single month into working days, weekends and holidays."""

    total_working_days: int = Field(..., ge=0, description="Days that are neither weekend nor holiday")
    total_working_hours: float = Field(..., ge=0, description="Working days multiplied by daily hours")
    holidays: List[PublicHoliday] = Field(default_factory=list, description="Holidays in the month")
    weekends: int = Field(..., ge=0, description="Saturdays and Sundays in the month")


class ShiftInterval(BaseModel):
    """A same-day shift with its unpaid break."""

    start_time: time = Field(..., description="Shift start (time of day)")
    end_time: time = Field(..., description="Shift end (time of day)")
    break_minutes: int = Field(default=0, ge=0, description="Break in minutes")


class MonthlyHours(BaseModel):
    """Required hours for one month of a yearly summary."""

    month: int = Field(..., ge=1, le=12)
    month_name: str
    hours: float = Field(..., ge=0)
    working_days: int = Field(..., ge=0)


class YearlyWorkingHours(BaseModel):
    """Required hours for a whole year, month by month."""

    year: int
    employment_type: EmploymentType
    monthly: List[MonthlyHours] = Field(default_factory=list)
    total: float = Field(..., ge=0)


class SpecialDayType(str, Enum):
    """Kind of a day that stands out in the calendar."""

    PUBLIC = "public"
    TRADING_SUNDAY = "trading_sunday"
    NON_TRADING_SUNDAY = "non_trading_sunday"


class SpecialDay(BaseModel):
    """A public holiday or a (non-)trading Sunday."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    day_date: date = Field(..., alias="date", description="Date of the day")
    name: str = Field(..., description="Display name")
    type: SpecialDayType


class CalendarDay(BaseModel):
    """One day of a month calendar with its classification."""

    model_config = ConfigDict(populate_by_name=True)

    day_date: date = Field(..., alias="date")
    day_of_month: int = Field(..., ge=1, le=31)
    day_of_week: int = Field(..., ge=0, le=6, description="0 is Monday, 6 is Sunday")
    is_weekend: bool
    is_public_holiday: bool
    holiday_name: Optional[str] = None
    is_trading_sunday: bool
    is_non_trading_sunday: bool
    is_working_day: bool


class Config(BaseModel):
    """Configuration for the schedule hours engine."""

    country_code: str = Field(default="PL", min_length=2, max_length=2, description="Default country")
    holiday_source: str = Field(default="nager", description="Holiday source: nager or local")
    nager_base_url: str = Field(
        default="https://date.nager.at/api/v3", description="Base URL of the Nager.Date API"
    )
    request_timeout: float = Field(default=10.0, gt=0, le=120, description="HTTP timeout in seconds")
    cache_directory: Optional[str] = Field(
        default=None, description="Directory for persisted holiday lists (memory cache if unset)"
    )
    default_employment_type: EmploymentType = Field(
        default=EmploymentType.FULL, description="Employment type used when none is given"
    )
    language: str = Field(default="pl", description="Language for month names and labels: pl or en")
    output_format: str = Field(default="json", description="Default output format: json or csv")
    output_directory: str = Field(default="results", description="Directory for output files")
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API server port")
    log_level: str = Field(default="INFO", description="Logging level")
