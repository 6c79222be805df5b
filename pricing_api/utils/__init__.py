"""
Utilities package for upstream access helpers.
"""

from .retry import RetryPolicy, exponential_backoff
from .time_utils import (
    MARKET_TIMEZONE,
    format_upstream_date,
    parse_request_date,
    parse_upstream_datetime,
    parse_upstream_utc,
    convert_to_market_time,
    market_time_for
)

__all__ = [
    'RetryPolicy',
    'exponential_backoff',
    'MARKET_TIMEZONE',
    'format_upstream_date',
    'parse_request_date',
    'parse_upstream_datetime',
    'parse_upstream_utc',
    'convert_to_market_time',
    'market_time_for'
]
