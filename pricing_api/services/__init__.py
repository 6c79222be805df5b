"""
Services package for business logic layer.
Imports all services for easy access.
"""

# Base service
from .base_service import BaseService

# Fetch pipeline
from .range_planner import plan_date_chunks
from .load_merger import merge_load_data
from .price_data_service import PriceDataService, SeriesFetchResult, ChunkFailure

# Analytics
from .statistics_service import StatisticsService
from .seasonal_service import SeasonalAnalysisService, season_for_month
from .forecast_service import PriceForecastService, hour_of_day_multiplier
from .pattern_service import PatternDetectionService, nearest_rank_percentile
from .rollup_service import RollupService

# Orchestrator
from .historical_pricing_service import HistoricalPricingService

__all__ = [
    # Base service
    "BaseService",

    # Fetch pipeline
    "plan_date_chunks",
    "merge_load_data",
    "PriceDataService",
    "SeriesFetchResult",
    "ChunkFailure",

    # Analytics
    "StatisticsService",
    "SeasonalAnalysisService",
    "season_for_month",
    "PriceForecastService",
    "hour_of_day_multiplier",
    "PatternDetectionService",
    "nearest_rank_percentile",
    "RollupService",

    # Orchestrator
    "HistoricalPricingService"
]
