"""
Short-horizon price forecast.

A weighted moving average of the trailing week, shaped by an hour-of-day
multiplier. The output is explainable on a dashboard; it is not a
statistical model.
"""

from datetime import timedelta
from typing import List

import numpy as np

from .base_service import BaseService
from ..models import PricePoint, Prediction

DECAY_RATE = 0.1
MIN_CONFIDENCE = 0.6
CONFIDENCE_STEP = 0.03


def hour_of_day_multiplier(hour: int) -> float:
    """Evening peak (16-20h) x1.3, overnight (23-06h) x0.8, else x1.0."""
    if 16 <= hour <= 20:
        return 1.3
    if hour >= 23 or hour <= 6:
        return 0.8
    return 1.0


def confidence_for(hour_offset: int) -> float:
    """``1 - 0.03 * offset`` floored at 0.6, rounded to 2 decimals to drop float noise."""
    return round(max(MIN_CONFIDENCE, 1 - hour_offset * CONFIDENCE_STEP), 2)


class PriceForecastService(BaseService):
    """Forecasts the hours following the end of a price series."""

    def __init__(self, horizon_hours: int = 24, window_hours: int = 168):
        super().__init__()
        self.horizon_hours = horizon_hours
        self.window_hours = window_hours

    def validate_input(self, **kwargs) -> bool:
        return True

    def weighted_average(self, prices: List[float]) -> float:
        """
        Exponentially weighted mean of the trailing window.

        The i-th most recent price (i = 0 for the latest) has weight
        ``exp(-i * 0.1)``.
        """
        window = np.asarray(prices[-self.window_hours:], dtype=float)[::-1]
        weights = np.exp(-np.arange(len(window)) * DECAY_RATE)
        return float(np.average(window, weights=weights))

    def predict(self, points: List[PricePoint]) -> List[Prediction]:
        """Predict ``horizon_hours`` hourly prices after the last point."""
        if not points:
            return []

        base_price = self.weighted_average([p.price for p in points])
        anchor = points[-1].market_time

        predictions = []
        for hour_offset in range(1, self.horizon_hours + 1):
            hour_of_day = (anchor + timedelta(hours=hour_offset)).hour
            predictions.append(Prediction(
                hour_offset=hour_offset,
                hour_of_day=hour_of_day,
                predicted_price=round(base_price * hour_of_day_multiplier(hour_of_day), 2),
                confidence=confidence_for(hour_offset)
            ))

        return predictions
