"""
FastAPI REST API for schedule hours.
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from schedule_hours import __version__
from schedule_hours.config.manager import ConfigManager
from schedule_hours.core.calendar import (
    count_working_days,
    get_month_calendar,
    get_special_days,
    get_trading_sundays,
)
from schedule_hours.core.calculator import (
    calculate_worked_hours,
    calculate_working_hours,
    calculate_yearly_working_hours,
    format_hours,
)
from schedule_hours.core.holiday_provider import HolidayService, create_holiday_service
from schedule_hours.data.schemas import (
    CalendarDay,
    Employment,
    EmploymentType,
    PublicHoliday,
    ShiftInterval,
    SpecialDay,
    YearlyWorkingHours,
)

# Load configuration
config_manager = ConfigManager()
config = config_manager.load_config()

logging.basicConfig(
    level=getattr(logging, config.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Initialize components
holiday_service = create_holiday_service(config)


def get_holiday_service() -> HolidayService:
    """Dependency returning the shared holiday service."""
    return holiday_service


# API Models
class HolidaysResponse(BaseModel):
    """Response model for the holidays endpoint."""

    holidays: List[PublicHoliday]
    cached: bool


class MonthlyHoursResponse(BaseModel):
    """Response model for a monthly working hours calculation."""

    year: int
    month: int
    country_code: str
    employment_type: EmploymentType
    hours_per_day: float
    total_working_days: int
    total_working_hours: float
    weekends: int
    holidays: List[PublicHoliday]
    formatted_hours: str


class WorkedHoursRequest(BaseModel):
    """Request model for summing worked hours."""

    shifts: List[ShiftInterval] = Field(default_factory=list, description="Shifts to sum")


class WorkedHoursResponse(BaseModel):
    """Response model for worked hours."""

    hours: float
    formatted_hours: str
    shift_count: int


class TradingSundaysResponse(BaseModel):
    """Response model for the trading Sundays of a year."""

    year: int
    trading_sundays: List[date]


class WorkingDaysResponse(BaseModel):
    """Response model for counting working days in a date range."""

    start: date
    end: date
    country_code: str
    respect_trading_sundays: bool
    working_days: int
    special_days: List[SpecialDay]


def _validate_year(year: int) -> None:
    if year < 2000 or year > 2100:
        raise HTTPException(status_code=400, detail="Year must be between 2000 and 2100")


def _validate_country(country: str) -> str:
    if len(country) != 2 or not country.isalpha():
        raise HTTPException(status_code=400, detail=f"Invalid country code: {country}")
    return country.upper()


# FastAPI app
app = FastAPI(
    title="Schedule Hours API",
    description="Holiday-aware working hours for work schedules",
    version=__version__,
)


@app.get("/")
async def root():
    """API root endpoint with basic info."""
    return {
        "name": "Schedule Hours API",
        "version": __version__,
        "endpoints": {
            "GET /holidays?year=&country=": "Public holidays for a year",
            "GET /hours/{year}/{month}": "Working days and required hours for a month",
            "GET /hours/{year}": "Required hours for every month of a year",
            "POST /worked-hours": "Sum hours worked on shifts",
            "GET /calendar/{year}/{month}": "Every day of a month, classified",
            "GET /trading-sundays/{year}": "Trading Sundays of a year",
            "GET /working-days?start=&end=": "Working days in a date range",
        },
    }


@app.get("/holidays", response_model=HolidaysResponse)
async def get_holidays(
    year: int = Query(..., description="Year, e.g. 2024"),
    country: str = Query(config.country_code, description="ISO country code"),
    service: HolidayService = Depends(get_holiday_service),
):
    """
    Get the public holidays for a year and country.

    Reports whether the list came from the cache.
    """
    _validate_year(year)
    country_code = _validate_country(country)

    cached = service.is_cached(year, country_code)
    holidays = await service.fetch_holidays(year, country_code)
    return HolidaysResponse(holidays=holidays, cached=cached)


@app.get("/hours/{year}/{month}", response_model=MonthlyHoursResponse)
async def get_monthly_hours(
    year: int,
    month: int,
    employment_type: EmploymentType = Query(config.default_employment_type),
    custom_hours: Optional[float] = Query(None, description="Hours per day for custom employment"),
    country: str = Query(config.country_code, description="ISO country code"),
    service: HolidayService = Depends(get_holiday_service),
):
    """
    Calculate working days and required hours for a month.

    Args:
        year: Year (2000-2100)
        month: Month (1-12)
    """
    _validate_year(year)
    if month < 1 or month > 12:
        raise HTTPException(status_code=400, detail="Month must be between 1 and 12")
    country_code = _validate_country(country)

    employment = Employment(type=employment_type, custom_hours=custom_hours)
    holidays = await service.fetch_holidays(year, country_code)
    result = calculate_working_hours(year, month, holidays, employment.hours_per_day)

    return MonthlyHoursResponse(
        year=year,
        month=month,
        country_code=country_code,
        employment_type=employment.type,
        hours_per_day=employment.hours_per_day,
        total_working_days=result.total_working_days,
        total_working_hours=result.total_working_hours,
        weekends=result.weekends,
        holidays=result.holidays,
        formatted_hours=format_hours(result.total_working_hours),
    )


@app.get("/hours/{year}", response_model=YearlyWorkingHours)
async def get_yearly_hours(
    year: int,
    employment_type: EmploymentType = Query(config.default_employment_type),
    custom_hours: Optional[float] = Query(None, description="Hours per day for custom employment"),
    country: str = Query(config.country_code, description="ISO country code"),
    service: HolidayService = Depends(get_holiday_service),
):
    """Required hours for every month of a year."""
    _validate_year(year)
    country_code = _validate_country(country)

    return await calculate_yearly_working_hours(
        year,
        employment_type,
        service,
        custom_hours=custom_hours,
        country_code=country_code,
        language=config.language,
    )


@app.get("/calendar/{year}/{month}", response_model=List[CalendarDay])
async def get_calendar(
    year: int,
    month: int,
    country: str = Query(config.country_code, description="ISO country code"),
    trading_sundays: bool = Query(True, description="Count trading Sundays as working days"),
    service: HolidayService = Depends(get_holiday_service),
):
    """Every day of a month with holidays and trading Sundays marked."""
    _validate_year(year)
    if month < 1 or month > 12:
        raise HTTPException(status_code=400, detail="Month must be between 1 and 12")
    country_code = _validate_country(country)

    holidays = await service.fetch_holidays(year, country_code)
    return get_month_calendar(year, month, holidays, respect_trading_sundays=trading_sundays)


@app.get("/trading-sundays/{year}", response_model=TradingSundaysResponse)
async def get_year_trading_sundays(year: int):
    """Trading Sundays of a year."""
    _validate_year(year)
    return TradingSundaysResponse(year=year, trading_sundays=get_trading_sundays(year))


@app.get("/working-days", response_model=WorkingDaysResponse)
async def get_working_days(
    start: date = Query(..., description="First day, e.g. 2024-01-01"),
    end: date = Query(..., description="Last day, included"),
    country: str = Query(config.country_code, description="ISO country code"),
    trading_sundays: bool = Query(True, description="Count trading Sundays as working days"),
    service: HolidayService = Depends(get_holiday_service),
):
    """Count working days between two dates and list the special days."""
    _validate_year(start.year)
    _validate_year(end.year)
    if end < start:
        raise HTTPException(status_code=400, detail="Start date must not be after end date")
    country_code = _validate_country(country)

    by_year = await service.fetch_holidays_for_years(range(start.year, end.year + 1), country_code)
    holidays = [h for year_holidays in by_year.values() for h in year_holidays]

    return WorkingDaysResponse(
        start=start,
        end=end,
        country_code=country_code,
        respect_trading_sundays=trading_sundays,
        working_days=count_working_days(start, end, holidays, trading_sundays),
        special_days=get_special_days(start, end, holidays),
    )


@app.post("/worked-hours", response_model=WorkedHoursResponse)
async def post_worked_hours(request: WorkedHoursRequest):
    """Sum the hours worked on a list of same-day shifts."""
    hours = calculate_worked_hours(request.shifts)
    return WorkedHoursResponse(
        hours=hours,
        formatted_hours=format_hours(hours),
        shift_count=len(request.shifts),
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
