"""
Domain models for pool price data.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from ..utils.time_utils import convert_to_market_time


class PricePoint(BaseModel):
    """One hourly pool price observation."""
    timestamp: datetime  # hour beginning, UTC
    price: float  # pool price in $/MWh

    # Optional enrichment, filled in by the load merger
    load: Optional[float] = None  # Alberta internal load in MW
    generation: Optional[float] = None  # MW

    # hour beginning in Mountain Prevailing Time (naive, market local)
    market_timestamp: Optional[datetime] = None
    forecast_price: Optional[float] = None
    rolling_30day_avg: Optional[float] = None

    @property
    def market_time(self) -> datetime:
        """Market local hour used for calendar grouping (derived if not published)."""
        if self.market_timestamp is not None:
            return self.market_timestamp
        return convert_to_market_time(self.timestamp)


class DateChunk(BaseModel):
    """Inclusive date window sent to the upstream in a single request."""
    start: date
    end: date

    @property
    def span_days(self) -> int:
        return (self.end - self.start).days

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


class LoadReading(BaseModel):
    """Auxiliary load values for one hour."""
    load: float
    generation: Optional[float] = None
