"""
Response models for API endpoints.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel

from .base import CamelModel
from .stats_models import (
    SeriesStatistics, SeasonalSummary, YearlySummary, Prediction, PatternFlag,
    DailyAverage, MonthlyAverage, HourlyPattern, PeakHour, PriceBand
)


class RawPriceRow(CamelModel):
    """Raw hourly row returned for custom ranges."""
    ts: datetime
    date: str
    hour: int
    price: float
    generation: float = 0.0
    ail: float = 0.0


class HourlyPriceRow(CamelModel):
    """Hourly row embedded in analytics responses (market local time)."""
    datetime: str
    date: str
    hour: int
    price: float


class AnalyticsResponse(CamelModel):
    """Full analytics for the daily, monthly and yearly timeframes."""
    timeframe: str
    statistics: SeriesStatistics
    chart_data: List[Union[DailyAverage, MonthlyAverage, HourlyPriceRow]]
    peak_hours: Optional[List[PeakHour]] = None
    hourly_patterns: Optional[List[HourlyPattern]] = None
    distribution: Optional[List[PriceBand]] = None
    seasonal_patterns: Optional[List[SeasonalSummary]] = None
    predictions: List[Prediction]
    patterns: List[PatternFlag]
    raw_hourly_data: List[HourlyPriceRow]
    last_updated: datetime


class HistoricalResponse(CamelModel):
    """Per-year summaries for the historical-10year timeframe."""
    historical_years: List[YearlySummary]
    total_years: int
    real_data_years: int
    uptime_percentage: float
    last_updated: datetime


class ErrorResponse(BaseModel):
    """Structured error body."""
    error: str
    details: str


class APIInfo(BaseModel):
    """Model for API information."""
    message: str
    version: str
    endpoints: dict


class HealthResponse(BaseModel):
    """Model for health check response."""
    status: str
    service: str
    api_key_configured: bool
