"""
Service for season-bucketed price analysis.
"""

import math
from typing import Dict, List

import numpy as np

from .base_service import BaseService
from ..models import PricePoint, SeasonalSummary

SEASONS = ("winter", "spring", "summer", "fall")

# Share of the most expensive hours dropped for the 95%-uptime price
TRIM_FRACTION = 0.05


def season_for_month(month: int) -> str:
    """Map a calendar month (1-12) to its season."""
    if month in (12, 1, 2):
        return "winter"
    if month in (3, 4, 5):
        return "spring"
    if month in (6, 7, 8):
        return "summer"
    return "fall"


class SeasonalAnalysisService(BaseService):
    """Buckets prices by season and computes plain and trimmed averages."""

    def validate_input(self, **kwargs) -> bool:
        return True

    def analyze(self, points: List[PricePoint]) -> List[SeasonalSummary]:
        """
        Summarize each season that has data.

        Seasons without points are omitted rather than reported as zero.
        """
        buckets: Dict[str, List[float]] = {season: [] for season in SEASONS}
        for point in points:
            buckets[season_for_month(point.market_time.month)].append(point.price)

        summaries = []
        for season in SEASONS:
            prices = buckets[season]
            if not prices:
                continue

            values = np.asarray(prices, dtype=float)
            trimmed = self.trimmed_mean(values)
            summaries.append(SeasonalSummary(
                season=season,
                average=float(values.mean()),
                peak=float(values.max()),
                uptime95_price=trimmed,
                hours=len(prices)
            ))
            self.logger.debug(
                f"{season}: avg={values.mean():.2f}, 95% uptime avg={trimmed:.2f} "
                f"(removed {math.floor(len(prices) * TRIM_FRACTION)} of {len(prices)} hours)")

        return summaries

    @staticmethod
    def trimmed_mean(values: np.ndarray, fraction: float = TRIM_FRACTION) -> float:
        """Mean after dropping the ``floor(n * fraction)`` highest values."""
        to_remove = math.floor(len(values) * fraction)
        kept = np.sort(values)[::-1][to_remove:]
        if len(kept) == 0:
            return float(values.mean())
        return float(kept.mean())
