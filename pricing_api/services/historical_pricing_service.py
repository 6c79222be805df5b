"""
Service orchestrating fetch and analytics for each pricing timeframe.

Timeframes:
    - daily: trailing 24 hours, full analytics
    - monthly: trailing 30 days, full analytics
    - yearly: trailing 12 months, full analytics plus seasonal patterns
    - custom: explicit start/end, raw hourly rows only
    - historical-10year: one uptime-filtered summary per calendar year
"""

import time
from datetime import date, datetime, timedelta, timezone
from typing import Callable, List, Optional

import pandas as pd

from .base_service import BaseService
from .forecast_service import PriceForecastService
from .pattern_service import PatternDetectionService
from .price_data_service import PriceDataService
from .rollup_service import RollupService
from .seasonal_service import SeasonalAnalysisService
from .statistics_service import StatisticsService
from ..config import ApplicationConfig
from ..exceptions import (
    PricingError, AuthenticationFailure, ConfigurationFailure,
    EmptyResultFailure, ValidationFailure
)
from ..models import (
    PricePoint, PricingRequest, Timeframe, YearlySummary, RawPriceRow,
    HourlyPriceRow, AnalyticsResponse, HistoricalResponse
)
from ..utils import parse_request_date

# Below this many settled hours the daily view widens its fetch
DAILY_MIN_HOURS = 10
DAILY_FALLBACK_DAYS = 30


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HistoricalPricingService(BaseService):
    """Drives the pipeline for one pricing request."""

    def __init__(
        self,
        config: ApplicationConfig,
        price_data_service: PriceDataService,
        statistics_service: StatisticsService = None,
        seasonal_service: SeasonalAnalysisService = None,
        forecast_service: PriceForecastService = None,
        pattern_service: PatternDetectionService = None,
        rollup_service: RollupService = None,
        clock: Callable[[], datetime] = utc_now,
        sleep: Callable[[float], None] = time.sleep
    ):
        super().__init__(price_data_service)
        self.config = config
        self.price_data_service = price_data_service
        self.statistics_service = statistics_service or StatisticsService()
        self.seasonal_service = seasonal_service or SeasonalAnalysisService()
        self.forecast_service = forecast_service or PriceForecastService(
            horizon_hours=config.pipeline.forecast_horizon_hours,
            window_hours=config.pipeline.forecast_window_hours
        )
        self.pattern_service = pattern_service or PatternDetectionService()
        self.rollup_service = rollup_service or RollupService()
        self.clock = clock
        self.sleep = sleep

    def validate_input(self, **kwargs) -> bool:
        """Validate a custom range request and return True."""
        request: PricingRequest = kwargs.get('request')
        if request is None:
            raise ValidationFailure("A pricing request is required")

        self.statistics_service.validate_input(
            uptime_percentage=request.uptime_percentage)

        if request.timeframe == Timeframe.CUSTOM:
            if not request.start_date or not request.end_date:
                raise ValidationFailure(
                    "startDate and endDate are required for the custom timeframe")
            start, end = self._parse_range(request.start_date, request.end_date)
            if start > end:
                raise ValidationFailure(
                    f"startDate {start.isoformat()} is after endDate {end.isoformat()}")

        return True

    def get_pricing(self, request: PricingRequest):
        """Dispatch a request to its timeframe handler."""
        self.validate_input(request=request)
        self.logger.info(f"Processing {request.timeframe.value} pricing request")

        if request.timeframe == Timeframe.CUSTOM:
            start, end = self._parse_range(request.start_date, request.end_date)
            return self.get_custom_range(start, end)

        if request.timeframe == Timeframe.HISTORICAL_10_YEAR:
            return self.get_historical_summary(request.uptime_percentage)

        return self.get_timeframe_analytics(request.timeframe)

    # ------------------------------------------------------------------
    # custom

    def get_custom_range(self, start: date, end: date) -> List[RawPriceRow]:
        """Raw hourly rows for an explicit range, no analytics."""
        self.logger.info(f"Custom date range: {start.isoformat()} to {end.isoformat()}")
        result = self.price_data_service.fetch_range(start, end)
        if result.is_partial:
            self.logger.warning(
                f"Custom range returned with {len(result.failures)} missing chunks")

        rows = [
            RawPriceRow(
                ts=point.timestamp,
                date=point.market_time.date().isoformat(),
                hour=point.market_time.hour,
                price=point.price,
                generation=point.generation or 0.0,
                ail=point.load or 0.0
            )
            for point in result.points
        ]

        ail_count = sum(1 for row in rows if row.ail > 0)
        self.logger.info(f"AIL data available for {ail_count} out of {len(rows)} records")
        return rows

    # ------------------------------------------------------------------
    # daily / monthly / yearly

    def trailing_window(self, timeframe: Timeframe) -> tuple:
        """Start and end dates of a named trailing timeframe."""
        now = self.clock()
        today = now.date()
        if timeframe == Timeframe.DAILY:
            return (now - timedelta(hours=24)).date(), today
        if timeframe == Timeframe.MONTHLY:
            return today - timedelta(days=self.config.pipeline.monthly_days), today
        if timeframe == Timeframe.YEARLY:
            return (pd.Timestamp(today) - pd.DateOffset(months=12)).date(), today
        raise ValidationFailure(f"Timeframe {timeframe.value} has no trailing window")

    def _settled_points(self, start: date, end: date) -> List[PricePoint]:
        """Fetch a range and drop hours that lie in the future."""
        now = self.clock()
        result = self.price_data_service.fetch_range(start, end)
        return [point for point in result.points if point.timestamp <= now]

    def _daily_points(self) -> List[PricePoint]:
        start, end = self.trailing_window(Timeframe.DAILY)
        try:
            points = self._settled_points(start, end)
        except EmptyResultFailure:
            points = []

        if len(points) < DAILY_MIN_HOURS:
            self.logger.info(
                f"Only got {len(points)} records, fetching last {DAILY_FALLBACK_DAYS} days as fallback")
            fallback_start = end - timedelta(days=DAILY_FALLBACK_DAYS)
            points = self._settled_points(fallback_start, end)[-24:]

        return points

    def get_timeframe_analytics(self, timeframe: Timeframe) -> AnalyticsResponse:
        """Full analytics pipeline for daily, monthly and yearly views."""
        if timeframe == Timeframe.DAILY:
            points = self._daily_points()
        else:
            start, end = self.trailing_window(timeframe)
            self.logger.info(f"{timeframe.value} date range: {start} to {end}")
            points = self._settled_points(start, end)

        if not points:
            raise EmptyResultFailure("No settled pool prices in the requested timeframe")

        statistics = self.statistics_service.compute_statistics([p.price for p in points])
        response = AnalyticsResponse(
            timeframe=timeframe.value,
            statistics=statistics,
            chart_data=[],
            predictions=self.forecast_service.predict(points),
            patterns=self.pattern_service.detect(points),
            raw_hourly_data=[self._hourly_row(p) for p in points],
            last_updated=self.clock()
        )

        if timeframe == Timeframe.YEARLY:
            response.chart_data = self.rollup_service.monthly_averages(points)
            response.seasonal_patterns = self.seasonal_service.analyze(points)
        else:
            if timeframe == Timeframe.DAILY:
                response.chart_data = list(response.raw_hourly_data)
            else:
                response.chart_data = self.rollup_service.daily_averages(points)
            response.peak_hours = self.rollup_service.peak_hours(points)
            response.hourly_patterns = self.rollup_service.hourly_patterns(points)
            response.distribution = self.rollup_service.price_distribution(points)

        return response

    @staticmethod
    def _hourly_row(point: PricePoint) -> HourlyPriceRow:
        market_time = point.market_time
        return HourlyPriceRow(
            datetime=market_time.strftime('%Y-%m-%d %H:%M'),
            date=market_time.date().isoformat(),
            hour=market_time.hour,
            price=point.price
        )

    # ------------------------------------------------------------------
    # historical-10year

    def year_windows(self) -> List[tuple]:
        """(year, start, end) for each year of the scan, oldest first."""
        today = self.clock().date()
        first_year = today.year - self.config.pipeline.historical_years + 1
        windows = []
        for year in range(first_year, today.year + 1):
            end = today if year == today.year else date(year, 12, 31)
            windows.append((year, date(year, 1, 1), end))
        return windows

    def summarize_year(self, year: int, points: List[PricePoint],
                       uptime_percentage: float) -> YearlySummary:
        """Apply the uptime filter and compute the year's statistics."""
        filtered = self.statistics_service.apply_uptime_filter(points, uptime_percentage)
        if not filtered:
            return YearlySummary(
                year=year,
                data_point_count=len(points),
                uptime_percentage=uptime_percentage,
                error="Uptime filter left no hours to summarize"
            )

        stats = self.statistics_service.compute_statistics([p.price for p in filtered])
        return YearlySummary(
            year=year,
            average=round(stats.average, 2),
            peak=round(stats.peak, 2),
            low=round(stats.low, 2),
            volatility_percent=round(stats.volatility_percent, 2),
            data_point_count=len(points),
            filtered_data_point_count=len(filtered),
            uptime_percentage=uptime_percentage,
            is_real=True
        )

    def get_historical_summary(self, uptime_percentage: float) -> HistoricalResponse:
        """
        Scan each calendar year sequentially.

        A year that fails to fetch, or has no rows upstream, is recorded with
        ``is_real=False`` and the scan continues.

        Raises:
            EmptyResultFailure: No year produced data
        """
        windows = self.year_windows()
        self.logger.info(
            f"Fetching {len(windows)} years ({windows[0][0]}-{windows[-1][0]}) "
            f"with {uptime_percentage}% uptime filter")

        summaries = []
        for index, (year, start, end) in enumerate(windows):
            if index > 0:
                self.sleep(self.config.pipeline.inter_chunk_delay_seconds)
            summaries.append(self._scan_year(year, start, end, uptime_percentage))

        real_years = sum(1 for summary in summaries if summary.is_real)
        self.logger.info(
            f"Completed {len(summaries)}-year scan. With data: {real_years}")

        if real_years == 0:
            raise EmptyResultFailure(
                f"No historical data available for {windows[0][0]}-{windows[-1][0]}")

        return HistoricalResponse(
            historical_years=summaries,
            total_years=len(summaries),
            real_data_years=real_years,
            uptime_percentage=uptime_percentage,
            last_updated=self.clock()
        )

    def _scan_year(self, year: int, start: date, end: date,
                   uptime_percentage: float) -> YearlySummary:
        try:
            result = self.price_data_service.fetch_range(start, end, enrich=False)
        except (AuthenticationFailure, ConfigurationFailure):
            raise
        except EmptyResultFailure:
            self.logger.warning(f"No data returned for year {year}")
            return YearlySummary(
                year=year, uptime_percentage=uptime_percentage, no_data=True)
        except PricingError as e:
            self.logger.error(f"Error fetching year {year}: {e.detail}")
            return YearlySummary(
                year=year, uptime_percentage=uptime_percentage, error=e.detail)

        return self.summarize_year(year, result.points, uptime_percentage)

    @staticmethod
    def _parse_range(start_value: str, end_value: str) -> tuple:
        try:
            return parse_request_date(start_value), parse_request_date(end_value)
        except ValueError:
            raise ValidationFailure(
                "Invalid date range. Please ensure dates are in YYYY-MM-DD format.")
