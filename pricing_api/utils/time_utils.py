"""
Date and time helpers for upstream timestamps.
"""

from datetime import date, datetime
from typing import Optional

import pytz

# Alberta market hours are published in Mountain Prevailing Time
MARKET_TIMEZONE = 'America/Edmonton'

UPSTREAM_DATE_FORMAT = '%Y-%m-%d'
UPSTREAM_DATETIME_FORMATS = ('%Y-%m-%d %H:%M', '%Y-%m-%dT%H:%M', '%Y-%m-%d %H:%M:%S')


def format_upstream_date(value: date) -> str:
    """Format a date as the YYYY-MM-DD query value the upstream expects."""
    return value.strftime(UPSTREAM_DATE_FORMAT)


def parse_request_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD request value.

    Raises:
        ValueError: If the value is not a valid calendar date
    """
    return datetime.strptime(value.strip(), UPSTREAM_DATE_FORMAT).date()


def parse_upstream_datetime(value: Optional[str]) -> datetime:
    """
    Parse an upstream timestamp such as "2024-01-15 14:00".

    Returns a naive datetime; the caller decides which zone it is in.

    Raises:
        ValueError: If the value is missing or in no known format
    """
    if not value:
        raise ValueError("Missing upstream timestamp")
    value = value.strip()
    for fmt in UPSTREAM_DATETIME_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"Unrecognized upstream timestamp: {value!r}")


def parse_upstream_utc(value: Optional[str]) -> datetime:
    """Parse an upstream UTC timestamp into an aware datetime."""
    return pytz.utc.localize(parse_upstream_datetime(value))


def convert_to_market_time(utc_datetime: datetime) -> datetime:
    """
    Convert a UTC datetime to naive market local time.

    Args:
        utc_datetime: Aware or naive (assumed UTC) datetime

    Returns:
        Naive datetime in Mountain Prevailing Time
    """
    market_tz = pytz.timezone(MARKET_TIMEZONE)
    if utc_datetime.tzinfo is None:
        utc_datetime = pytz.utc.localize(utc_datetime)
    return utc_datetime.astimezone(market_tz).replace(tzinfo=None)


def market_time_for(utc_value: datetime, mpt_value: Optional[str]) -> datetime:
    """Use the published local timestamp when present, else derive it."""
    if mpt_value:
        try:
            return parse_upstream_datetime(mpt_value)
        except ValueError:
            pass
    return convert_to_market_time(utc_value)
