"""
Service for price spike and sustained-high detection.
"""

import math
from typing import List, Sequence

import numpy as np

from .base_service import BaseService
from ..models import PricePoint, PatternFlag

SPIKE_STDDEVS = 2
SUSTAINED_PERCENTILE = 75


def nearest_rank_percentile(values: Sequence[float], percentile: float) -> float:
    """Nearest-rank percentile: element ``ceil(p/100 * n) - 1`` of the sorted values."""
    ordered = sorted(values)
    index = max(0, math.ceil(percentile / 100 * len(ordered)) - 1)
    return float(ordered[index])


class PatternDetectionService(BaseService):
    """Flags statistical price spikes and sustained high-price levels."""

    def validate_input(self, **kwargs) -> bool:
        return True

    @staticmethod
    def spike_threshold(prices: Sequence[float]) -> float:
        """``mean + 2 * stddev`` (population) of the series."""
        values = np.asarray(prices, dtype=float)
        return float(values.mean() + SPIKE_STDDEVS * values.std())

    def detect(self, points: List[PricePoint]) -> List[PatternFlag]:
        """
        Detect pricing patterns.

        A ``price_spikes`` flag is emitted only when at least one hour exceeds
        the spike threshold; ``sustained_high`` is always reported. Thresholds
        are reported exactly; only the description rounds to whole dollars.
        """
        if not points:
            return []

        prices = [p.price for p in points]
        patterns = []

        threshold = self.spike_threshold(prices)
        spike_count = sum(1 for price in prices if price > threshold)
        if spike_count > 0:
            patterns.append(PatternFlag(
                type="price_spikes",
                count=spike_count,
                threshold=threshold,
                description=f"Detected {spike_count} price spikes above ${round(threshold)}/MWh"
            ))

        percentile_75 = nearest_rank_percentile(prices, SUSTAINED_PERCENTILE)
        patterns.append(PatternFlag(
            type="sustained_high",
            threshold=percentile_75,
            description=f"Extended periods above ${round(percentile_75)}/MWh detected"
        ))

        return patterns
