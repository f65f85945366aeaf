"""
Tests for the REST API.
"""

import pytest
from fastapi.testclient import TestClient

from schedule_hours.api import app, get_holiday_service
from schedule_hours.core.holiday_provider import HolidayService

from conftest import FakeProvider


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def client(provider):
    """Test client with the holiday service backed by a fake provider."""
    service = HolidayService(provider)
    app.dependency_overrides[get_holiday_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHolidaysEndpoint:
    """Tests for GET /holidays."""

    def test_reports_cache_state(self, client, provider):
        """The first request fetches, the second is served from the cache."""
        first = client.get("/holidays", params={"year": 2024, "country": "PL"})
        second = client.get("/holidays", params={"year": 2024, "country": "PL"})

        assert first.status_code == 200
        assert first.json()["cached"] is False
        assert second.json()["cached"] is True
        assert provider.calls == [(2024, "PL")]

    def test_uses_api_field_names(self, client):
        holidays = client.get("/holidays", params={"year": 2024}).json()["holidays"]

        assert holidays[0] == {
            "date": "2024-01-01",
            "localName": "Nowy Rok",
            "countryCode": "PL",
            "name": "New Year's Day",
        }

    def test_year_is_required(self, client):
        assert client.get("/holidays").status_code == 422

    @pytest.mark.parametrize("year", [1999, 2101])
    def test_year_out_of_range(self, client, year):
        response = client.get("/holidays", params={"year": year})
        assert response.status_code == 400

    def test_invalid_country(self, client):
        response = client.get("/holidays", params={"year": 2024, "country": "POL"})
        assert response.status_code == 400

    def test_provider_failure_gives_empty_list(self):
        service = HolidayService(FakeProvider(fail=True))
        app.dependency_overrides[get_holiday_service] = lambda: service
        try:
            response = TestClient(app).get("/holidays", params={"year": 2024})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json() == {"holidays": [], "cached": False}


class TestHoursEndpoints:
    """Tests for the working hours endpoints."""

    def test_monthly_hours(self, client):
        data = client.get("/hours/2024/1").json()

        assert data["total_working_days"] == 22
        assert data["total_working_hours"] == 176
        assert data["weekends"] == 8
        assert data["formatted_hours"] == "176h"
        assert [h["date"] for h in data["holidays"]] == ["2024-01-01", "2024-01-06"]

    def test_monthly_hours_half_time(self, client):
        data = client.get("/hours/2024/1", params={"employment_type": "half"}).json()

        assert data["hours_per_day"] == 4
        assert data["total_working_hours"] == 88

    def test_monthly_hours_custom(self, client):
        params = {"employment_type": "custom", "custom_hours": 7.5}
        data = client.get("/hours/2024/1", params=params).json()

        assert data["total_working_hours"] == 165
        assert data["formatted_hours"] == "165h"

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, client, month):
        assert client.get(f"/hours/2024/{month}").status_code == 400

    def test_invalid_employment_type(self, client):
        response = client.get("/hours/2024/1", params={"employment_type": "weekly"})
        assert response.status_code == 422

    def test_yearly_hours(self, client, provider):
        data = client.get("/hours/2024").json()

        assert len(data["monthly"]) == 12
        assert data["total"] == 2016
        assert data["total"] == sum(m["hours"] for m in data["monthly"])
        assert provider.calls == [(2024, "PL")]


class TestWorkedHoursEndpoint:
    """Tests for POST /worked-hours."""

    def test_two_shifts(self, client):
        shift = {"start_time": "09:00", "end_time": "17:00", "break_minutes": 30}
        response = client.post("/worked-hours", json={"shifts": [shift, shift]})

        assert response.status_code == 200
        assert response.json() == {"hours": 15.0, "formatted_hours": "15h", "shift_count": 2}

    def test_single_shift(self, client):
        shift = {"start_time": "09:00", "end_time": "17:00", "break_minutes": 30}
        data = client.post("/worked-hours", json={"shifts": [shift]}).json()

        assert data["hours"] == 7.5
        assert data["formatted_hours"] == "7h 30min"

    def test_negative_break_rejected(self, client):
        shift = {"start_time": "09:00", "end_time": "17:00", "break_minutes": -1}
        assert client.post("/worked-hours", json={"shifts": [shift]}).status_code == 422


class TestInfoEndpoints:
    """Tests for the informational endpoints."""

    def test_root(self, client):
        assert client.get("/").json()["name"] == "Schedule Hours API"

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"


class TestCalendarEndpoints:
    """Tests for the calendar, trading Sunday and working day endpoints."""

    def test_trading_sundays(self, client):
        response = client.get("/trading-sundays/2024")

        assert response.status_code == 200
        assert response.json()["trading_sundays"] == [
            "2024-01-28", "2024-03-24", "2024-04-28", "2024-06-30",
            "2024-08-25", "2024-12-15", "2024-12-22",
        ]

    def test_month_calendar(self, client):
        days = client.get("/calendar/2024/1").json()

        assert len(days) == 31
        assert days[0]["date"] == "2024-01-01"
        assert days[0]["holiday_name"] == "Nowy Rok"
        assert days[27]["is_trading_sunday"] is True
        assert days[27]["is_working_day"] is True

    def test_month_calendar_without_trading_sundays(self, client):
        days = client.get("/calendar/2024/1", params={"trading_sundays": False}).json()
        assert days[27]["is_working_day"] is False

    def test_month_calendar_invalid_month(self, client):
        assert client.get("/calendar/2024/13").status_code == 400

    def test_working_days(self, client):
        params = {"start": "2024-01-01", "end": "2024-01-31"}

        assert client.get("/working-days", params=params).json()["working_days"] == 23
        params["trading_sundays"] = False
        assert client.get("/working-days", params=params).json()["working_days"] == 22

    def test_working_days_across_years(self, client, provider):
        """Holidays of every year in the range are fetched."""
        data = client.get(
            "/working-days", params={"start": "2023-12-31", "end": "2024-01-01"}
        ).json()

        assert sorted(provider.calls) == [(2023, "PL"), (2024, "PL")]
        assert data["working_days"] == 0
        assert [d["type"] for d in data["special_days"]] == ["non_trading_sunday", "public"]

    def test_working_days_reversed_range(self, client):
        response = client.get("/working-days", params={"start": "2024-02-01", "end": "2024-01-01"})
        assert response.status_code == 400
