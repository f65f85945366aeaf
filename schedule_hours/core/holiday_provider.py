"""
Public holiday providers and the cached holiday service.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import holidays
import httpx
from pydantic import TypeAdapter, ValidationError

from schedule_hours.data.schemas import Config, PublicHoliday

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY = "PL"
NAGER_API_BASE = "https://date.nager.at/api/v3"

_holiday_list = TypeAdapter(List[PublicHoliday])


class HolidayProviderError(Exception):
    """Raised when a holiday provider cannot deliver a holiday list."""


class NagerHolidayProvider:
    """Fetches public holidays from the Nager.Date REST API."""

    def __init__(
        self,
        base_url: str = NAGER_API_BASE,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the provider.

        Args:
            base_url: Base URL of the API, without the trailing slash.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def get_holidays(self, year: int, country_code: str) -> List[PublicHoliday]:
        """
        Fetch the holidays for one year and country.

        Raises:
            HolidayProviderError: On network errors, non-2xx responses or
                an unexpected response body.
        """
        url = f"{self.base_url}/PublicHolidays/{year}/{country_code}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            raise HolidayProviderError(
                f"Holiday API returned {e.response.status_code} for {year}/{country_code}"
            ) from e
        except httpx.HTTPError as e:
            raise HolidayProviderError(f"Holiday API request failed: {e}") from e
        except ValueError as e:
            raise HolidayProviderError(f"Holiday API returned invalid JSON: {e}") from e

        try:
            return _holiday_list.validate_python(payload)
        except ValidationError as e:
            raise HolidayProviderError(f"Unexpected holiday payload: {e}") from e


class LocalHolidayProvider:
    """Computes public holidays offline with the holidays library."""

    def __init__(self, language: Optional[str] = None):
        """
        Initialize the provider.

        Args:
            language: Language for holiday names, None for the country default.
        """
        self.language = language

    async def get_holidays(self, year: int, country_code: str) -> List[PublicHoliday]:
        try:
            country_holidays = holidays.country_holidays(country_code, years=year)
        except NotImplementedError as e:
            raise HolidayProviderError(f"No holiday data for country {country_code}") from e

        # Names stay in the country default unless the language is supported
        if self.language and self.language in country_holidays.supported_languages:
            country_holidays = holidays.country_holidays(
                country_code, years=year, language=self.language
            )

        return [
            PublicHoliday(date=day, localName=name, countryCode=country_code)
            for day, name in sorted(country_holidays.items())
        ]


class HolidayCache(ABC):
    """Lookup of holiday lists keyed by (year, country code)."""

    @abstractmethod
    def get(self, year: int, country_code: str) -> Optional[List[PublicHoliday]]:
        """Return the cached list or None on a miss."""

    @abstractmethod
    def set(self, year: int, country_code: str, holiday_list: List[PublicHoliday]) -> None:
        """Store a list, replacing any previous entry."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""

    def contains(self, year: int, country_code: str) -> bool:
        return self.get(year, country_code) is not None


class InMemoryHolidayCache(HolidayCache):
    """Holiday cache living for the lifetime of the process."""

    def __init__(self):
        self._entries: Dict[Tuple[int, str], List[PublicHoliday]] = {}

    def get(self, year: int, country_code: str) -> Optional[List[PublicHoliday]]:
        entry = self._entries.get((year, country_code.upper()))
        if entry is None:
            return None
        return list(entry)

    def set(self, year: int, country_code: str, holiday_list: List[PublicHoliday]) -> None:
        self._entries[(year, country_code.upper())] = list(holiday_list)

    def clear(self) -> None:
        self._entries.clear()


class FileHolidayCache(HolidayCache):
    """Holiday cache persisted as one JSON file per year and country."""

    def __init__(self, directory: str):
        """
        Initialize the file cache.

        Args:
            directory: Directory holding the cache files. Created on first write.
        """
        self.directory = Path(directory)

    def _path(self, year: int, country_code: str) -> Path:
        return self.directory / f"holidays_{year}_{country_code.upper()}.json"

    def get(self, year: int, country_code: str) -> Optional[List[PublicHoliday]]:
        path = self._path(year, country_code)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return _holiday_list.validate_python(json.load(f))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable holiday cache file {path}: {e}")
            return None

    def set(self, year: int, country_code: str, holiday_list: List[PublicHoliday]) -> None:
        path = self._path(year, country_code)
        data = _holiday_list.dump_python(holiday_list, mode="json", by_alias=True)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning(f"Could not write holiday cache file {path}: {e}")
            return
        logger.debug(f"Cached {len(holiday_list)} holidays in {path}")

    def clear(self) -> None:
        if not self.directory.exists():
            return
        for path in self.directory.glob("holidays_*.json"):
            path.unlink()


class HolidayService:
    """Cached access to public holidays."""

    def __init__(self, provider, cache: Optional[HolidayCache] = None):
        """
        Initialize the holiday service.

        Args:
            provider: Object with an async get_holidays(year, country_code) method.
            cache: Holiday cache, a fresh in-memory cache if not given.
        """
        self.provider = provider
        self.cache = cache if cache is not None else InMemoryHolidayCache()

    async def fetch_holidays(
        self, year: int, country_code: str = DEFAULT_COUNTRY
    ) -> List[PublicHoliday]:
        """
        Get the public holidays for a year and country.

        A failing provider never raises here: the failure is logged and an
        empty list is returned. Empty results from failures are not cached.

        Args:
            year: Four-digit year.
            country_code: ISO-3166 alpha-2 country code.

        Returns:
            List of PublicHoliday objects in provider order.
        """
        # Cache I/O runs in a worker thread
        cached = await asyncio.to_thread(self.cache.get, year, country_code)
        if cached is not None:
            logger.debug(f"Holiday cache hit for {year}/{country_code}")
            return cached

        try:
            holiday_list = await self.provider.get_holidays(year, country_code)
        except HolidayProviderError as e:
            logger.error(f"Error fetching holidays for {year}/{country_code}: {e}")
            return []

        await asyncio.to_thread(self.cache.set, year, country_code, holiday_list)
        logger.info(f"Fetched {len(holiday_list)} holidays for {year}/{country_code}")
        return holiday_list

    async def fetch_holidays_for_years(
        self, years: Iterable[int], country_code: str = DEFAULT_COUNTRY
    ) -> Dict[int, List[PublicHoliday]]:
        """
        Fetch several years concurrently.

        Returns:
            Mapping of year to holidays, in the order the years were given.
        """
        years = list(years)
        results = await asyncio.gather(
            *(self.fetch_holidays(year, country_code) for year in years)
        )
        return dict(zip(years, results))

    def is_cached(self, year: int, country_code: str = DEFAULT_COUNTRY) -> bool:
        """Check whether a holiday list is already cached."""
        return self.cache.contains(year, country_code)

    def clear_cache(self) -> None:
        """Clear the holiday cache."""
        self.cache.clear()


def create_holiday_service(config: Config) -> HolidayService:
    """
    Build a HolidayService from configuration.

    Raises:
        ValueError: If the configured holiday source is unknown.
    """
    if config.holiday_source == "nager":
        provider = NagerHolidayProvider(
            base_url=config.nager_base_url, timeout=config.request_timeout
        )
    elif config.holiday_source == "local":
        provider = LocalHolidayProvider(language=config.language)
    else:
        raise ValueError(f"Unknown holiday source: {config.holiday_source}")

    if config.cache_directory:
        cache: HolidayCache = FileHolidayCache(config.cache_directory)
    else:
        cache = InMemoryHolidayCache()
    return HolidayService(provider, cache)


def find_holiday(day: date, holiday_list: List[PublicHoliday]) -> Optional[PublicHoliday]:
    """Return the holiday falling on the given day, if any."""
    for holiday in holiday_list:
        if holiday.holiday_date == day:
            return holiday
    return None


def get_upcoming_holidays(
    holiday_list: List[PublicHoliday],
    from_date: Optional[date] = None,
    limit: int = 5,
) -> List[PublicHoliday]:
    """
    Get holidays on or after a date.

    Args:
        holiday_list: Holidays sorted by date.
        from_date: First date to include, today if not given.
        limit: Maximum number of holidays returned.
    """
    from_date = from_date or date.today()
    upcoming = [h for h in holiday_list if h.holiday_date >= from_date]
    return upcoming[:limit]


def group_holidays_by_month(holiday_list: List[PublicHoliday]) -> Dict[int, List[PublicHoliday]]:
    """Group holidays by month number, keeping their order within a month."""
    grouped: Dict[int, List[PublicHoliday]] = {}
    for holiday in holiday_list:
        grouped.setdefault(holiday.holiday_date.month, []).append(holiday)
    return grouped
