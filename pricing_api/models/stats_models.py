"""
Analytics models derived from a price series.
"""

from typing import Literal, Optional

from .base import CamelModel


class SeriesStatistics(CamelModel):
    """Summary statistics over a price series."""
    average: float
    peak: float
    low: float
    volatility_percent: float  # population stddev as % of the mean
    trend: Literal["up", "down", "stable"]


class SeasonalSummary(CamelModel):
    """Per-season price summary."""
    season: Literal["winter", "spring", "summer", "fall"]
    average: float
    peak: float
    # mean after dropping the top 5% most expensive hours
    uptime95_price: float
    hours: int


class YearlySummary(CamelModel):
    """One calendar year in a multi-year scan."""
    year: int
    average: Optional[float] = None
    peak: Optional[float] = None
    low: Optional[float] = None
    volatility_percent: Optional[float] = None
    data_point_count: int = 0
    filtered_data_point_count: int = 0
    uptime_percentage: float = 100.0
    is_real: bool = False
    # upstream answered but had no rows for the year
    no_data: bool = False
    error: Optional[str] = None


class Prediction(CamelModel):
    """Forecast price for one future hour."""
    hour_offset: int  # 1..horizon
    hour_of_day: int
    predicted_price: float
    confidence: float


class PatternFlag(CamelModel):
    """Detected pricing pattern."""
    type: Literal["price_spikes", "sustained_high"]
    threshold: float
    count: Optional[int] = None
    description: str


class DailyAverage(CamelModel):
    """Daily average for chart display."""
    date: str
    price: float


class MonthlyAverage(CamelModel):
    """Monthly average and peak for chart display."""
    year: int
    month: str  # "Jan".."Dec"
    average: float
    peak: float


class HourlyPattern(CamelModel):
    """Average price for an hour of day across all dates."""
    hour: int
    average_price: float


class PeakHour(CamelModel):
    """One of the most expensive hours in a series."""
    date: str
    hour: int
    price: float


class PriceBand(CamelModel):
    """Hour count within a price band."""
    range: str
    hours: int
