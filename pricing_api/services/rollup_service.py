"""
Service for chart rollups of an hourly price series.
"""

import calendar
from typing import List

import pandas as pd

from .base_service import BaseService
from ..models import (
    PricePoint, DailyAverage, MonthlyAverage, HourlyPattern, PeakHour, PriceBand
)

PRICE_BANDS = [
    ("$0-25", 0, 25),
    ("$25-50", 25, 50),
    ("$50-75", 50, 75),
    ("$75-100", 75, 100),
    ("$100+", 100, float("inf")),
]


class RollupService(BaseService):
    """Daily, monthly and hour-of-day reductions for chart consumption."""

    def validate_input(self, **kwargs) -> bool:
        return True

    @staticmethod
    def to_frame(points: List[PricePoint]) -> pd.DataFrame:
        """One row per point, keyed by market local time."""
        df = pd.DataFrame({
            "market_time": pd.to_datetime([p.market_time for p in points]),
            "price": [p.price for p in points],
        })
        return df

    def daily_averages(self, points: List[PricePoint]) -> List[DailyAverage]:
        """Average price per calendar date."""
        if not points:
            return []
        df = self.to_frame(points)
        grouped = df.groupby(df["market_time"].dt.date)["price"].mean()
        return [
            DailyAverage(date=day.isoformat(), price=round(float(price), 2))
            for day, price in grouped.items()
        ]

    def monthly_averages(self, points: List[PricePoint]) -> List[MonthlyAverage]:
        """Average and peak price per year-month."""
        if not points:
            return []
        df = self.to_frame(points)
        grouped = df.groupby(
            [df["market_time"].dt.year, df["market_time"].dt.month]
        )["price"].agg(["mean", "max"])

        return [
            MonthlyAverage(
                year=int(year),
                month=calendar.month_abbr[int(month)],
                average=round(float(row["mean"]), 2),
                peak=round(float(row["max"]), 2)
            )
            for (year, month), row in grouped.iterrows()
        ]

    def hourly_patterns(self, points: List[PricePoint]) -> List[HourlyPattern]:
        """Average price per hour of day (0-23); hours without data report 0."""
        if not points:
            return [HourlyPattern(hour=hour, average_price=0.0) for hour in range(24)]
        df = self.to_frame(points)
        grouped = df.groupby(df["market_time"].dt.hour)["price"].mean()
        grouped = grouped.reindex(range(24), fill_value=0.0)
        return [
            HourlyPattern(hour=int(hour), average_price=round(float(price), 2))
            for hour, price in grouped.items()
        ]

    def peak_hours(self, points: List[PricePoint], limit: int = 10) -> List[PeakHour]:
        """The ``limit`` most expensive hours, highest first."""
        if not points:
            return []
        df = self.to_frame(points).nlargest(limit, "price")
        return [
            PeakHour(
                date=row.market_time.date().isoformat(),
                hour=int(row.market_time.hour),
                price=float(row.price)
            )
            for row in df.itertuples()
        ]

    def price_distribution(self, points: List[PricePoint]) -> List[PriceBand]:
        """Hour counts per price band."""
        prices = pd.Series([p.price for p in points], dtype=float)
        return [
            PriceBand(range=label, hours=int(((prices >= low) & (prices < high)).sum()))
            for label, low, high in PRICE_BANDS
        ]
