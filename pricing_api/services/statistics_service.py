"""
Service for series statistics and uptime filtering.
"""

import math
from typing import List, Sequence

import numpy as np

from .base_service import BaseService
from ..exceptions import EmptyResultFailure, ValidationFailure
from ..models import PricePoint, SeriesStatistics

TREND_THRESHOLD = 0.05


class StatisticsService(BaseService):
    """Service for statistics and analysis operations."""

    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters for statistics queries."""
        uptime_percentage = kwargs.get('uptime_percentage')

        if uptime_percentage is not None and not 0 <= uptime_percentage <= 100:
            raise ValidationFailure(
                f"Uptime percentage must be between 0 and 100, got {uptime_percentage}")

        return True

    def compute_statistics(self, prices: Sequence[float]) -> SeriesStatistics:
        """
        Compute average, peak, low, volatility and trend.

        Raises:
            EmptyResultFailure: If the series is empty
        """
        if len(prices) == 0:
            raise EmptyResultFailure("No historical data available")

        values = np.asarray(prices, dtype=float)
        return SeriesStatistics(
            average=float(values.mean()),
            peak=float(values.max()),
            low=float(values.min()),
            volatility_percent=self.calculate_volatility(values),
            trend=self.calculate_trend(values)
        )

    @staticmethod
    def calculate_volatility(values: np.ndarray) -> float:
        """Population standard deviation as a percentage of the mean."""
        mean = float(values.mean())
        if mean == 0:
            return 0.0
        return float(values.std() / mean * 100)

    @staticmethod
    def calculate_trend(values: np.ndarray) -> str:
        """
        Compare the mean of the last quarter of the series with the first.

        Returns "up" above +5%, "down" below -5%, otherwise "stable".
        """
        quarter = len(values) // 4
        if quarter == 0:
            return "stable"

        first_avg = float(values[:quarter].mean())
        last_avg = float(values[-quarter:].mean())
        if first_avg == 0:
            return "stable"

        change = (last_avg - first_avg) / first_avg
        if change > TREND_THRESHOLD:
            return "up"
        if change < -TREND_THRESHOLD:
            return "down"
        return "stable"

    def apply_uptime_filter(self, points: List[PricePoint],
                            uptime_percentage: float) -> List[PricePoint]:
        """
        Keep the cheapest ``floor(len * uptime / 100)`` hours.

        Models a load that curtails during its most expensive hours. The
        result is ordered by ascending price, except at 100% where the
        input is returned unchanged in chronological order.
        """
        self.validate_input(uptime_percentage=uptime_percentage)

        if uptime_percentage >= 100:
            return list(points)

        hours_to_keep = math.floor(len(points) * uptime_percentage / 100)
        return sorted(points, key=lambda p: p.price)[:hours_to_keep]
