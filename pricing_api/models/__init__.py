"""
Models package for API data structures.
Imports all models for easy access.
"""

# Base
from .base import CamelModel

# Price models
from .price_models import PricePoint, DateChunk, LoadReading

# Upstream schemas
from .upstream_models import (
    PoolPriceRecord,
    PoolPriceEnvelope,
    LoadRecord,
    LoadEnvelope,
    parse_decimal
)

# Enrichment outcome
from .enrichment_models import EnrichedData, EnrichmentSkipped, EnrichmentOutcome

# Statistics models
from .stats_models import (
    SeriesStatistics,
    SeasonalSummary,
    YearlySummary,
    Prediction,
    PatternFlag,
    DailyAverage,
    MonthlyAverage,
    HourlyPattern,
    PeakHour,
    PriceBand
)

# Request models
from .request_models import Timeframe, PricingRequest

# Response models
from .response_models import (
    RawPriceRow,
    HourlyPriceRow,
    AnalyticsResponse,
    HistoricalResponse,
    ErrorResponse,
    APIInfo,
    HealthResponse
)

__all__ = [
    "CamelModel",

    # Price models
    "PricePoint",
    "DateChunk",
    "LoadReading",

    # Upstream schemas
    "PoolPriceRecord",
    "PoolPriceEnvelope",
    "LoadRecord",
    "LoadEnvelope",
    "parse_decimal",

    # Enrichment outcome
    "EnrichedData",
    "EnrichmentSkipped",
    "EnrichmentOutcome",

    # Statistics models
    "SeriesStatistics",
    "SeasonalSummary",
    "YearlySummary",
    "Prediction",
    "PatternFlag",
    "DailyAverage",
    "MonthlyAverage",
    "HourlyPattern",
    "PeakHour",
    "PriceBand",

    # Request models
    "Timeframe",
    "PricingRequest",

    # Response models
    "RawPriceRow",
    "HourlyPriceRow",
    "AnalyticsResponse",
    "HistoricalResponse",
    "ErrorResponse",
    "APIInfo",
    "HealthResponse"
]
