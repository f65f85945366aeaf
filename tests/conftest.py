"""
Shared fixtures for the schedule hours tests.
"""

from datetime import date
from typing import List

import pytest

from schedule_hours.core.holiday_provider import HolidayProviderError, HolidayService
from schedule_hours.data.schemas import PublicHoliday

PL_HOLIDAYS_2024 = [
    ("2024-01-01", "Nowy Rok", "New Year's Day"),
    ("2024-01-06", "Święto Trzech Króli", "Epiphany"),
    ("2024-03-31", "Wielkanoc", "Easter Sunday"),
    ("2024-04-01", "Drugi Dzień Wielkanocy", "Easter Monday"),
    ("2024-05-01", "Święto Pracy", "May Day"),
    ("2024-05-03", "Święto Narodowe Trzeciego Maja", "Constitution Day"),
    ("2024-05-19", "Zielone Świątki", "Pentecost Sunday"),
    ("2024-05-30", "Boże Ciało", "Corpus Christi"),
    ("2024-08-15", "Wniebowzięcie Najświętszej Maryi Panny", "Assumption Day"),
    ("2024-11-01", "Wszystkich Świętych", "All Saints' Day"),
    ("2024-11-11", "Narodowe Święto Niepodległości", "Independence Day"),
    ("2024-12-25", "Boże Narodzenie (pierwszy dzień)", "Christmas Day"),
    ("2024-12-26", "Boże Narodzenie (drugi dzień)", "St. Stephen's Day"),
]


def make_holiday(day: str, local_name: str, name: str = None, country_code: str = "PL") -> PublicHoliday:
    return PublicHoliday(
        date=date.fromisoformat(day), localName=local_name, countryCode=country_code, name=name
    )


def nager_payload(year: int = 2024) -> List[dict]:
    """Holidays in the JSON shape returned by date.nager.at."""
    return [
        {
            "date": day.replace("2024", str(year), 1),
            "localName": local_name,
            "name": name,
            "countryCode": "PL",
            "fixed": False,
            "global": True,
            "counties": None,
            "launchYear": None,
            "types": ["Public"],
        }
        for day, local_name, name in PL_HOLIDAYS_2024
    ]


class FakeProvider:
    """Holiday provider recording its calls."""

    def __init__(self, holidays=None, fail: bool = False):
        self.holidays = holidays if holidays is not None else pl_holidays()
        self.fail = fail
        self.calls = []

    async def get_holidays(self, year: int, country_code: str) -> List[PublicHoliday]:
        self.calls.append((year, country_code))
        if self.fail:
            raise HolidayProviderError("service unavailable")
        return [h for h in self.holidays if h.holiday_date.year == year]


def pl_holidays() -> List[PublicHoliday]:
    return [make_holiday(*row) for row in PL_HOLIDAYS_2024]


@pytest.fixture
def holidays_2024():
    """Polish public holidays for 2024."""
    return pl_holidays()


@pytest.fixture
def fake_provider():
    """A provider returning the 2024 Polish holidays."""
    return FakeProvider()


@pytest.fixture
def holiday_service(fake_provider):
    """A HolidayService backed by the fake provider."""
    return HolidayService(fake_provider)
