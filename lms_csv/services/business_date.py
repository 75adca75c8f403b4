from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

"""Business timezone utilities.

The business operates in America/Bogota (UTC-5, no DST). The business date is
used for deterministic file naming independent of server locale.
"""

__all__ = [
    "BUSINESS_TIMEZONE",
    "BusinessDateProvider",
    "get_business_date",
    "make_business_date_provider",
    "suggested_filename",
]

BUSINESS_TIMEZONE = "America/Bogota"

# Zero-arg callable returning the current business date as YYYY-MM-DD
BusinessDateProvider = Callable[[], str]


def _as_utc(value: datetime) -> datetime:
    # naive datetimes are treated as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def get_business_date(now: datetime | None = None, tz: str = BUSINESS_TIMEZONE) -> str:
    """Return the calendar date in the business timezone as YYYY-MM-DD."""
    moment = _as_utc(now) if now is not None else datetime.now(UTC)
    return moment.astimezone(ZoneInfo(tz)).strftime("%Y-%m-%d")


def make_business_date_provider(tz: str = BUSINESS_TIMEZONE) -> BusinessDateProvider:
    ZoneInfo(tz)  # fail early on unknown zone names

    def _provider() -> str:
        return get_business_date(tz=tz)

    return _provider


def suggested_filename(business_date: str) -> str:
    """'2024-03-05' -> '20240305.csv'"""
    year, month, day = business_date.split("-")
    return f"{year}{month}{day}.csv"
