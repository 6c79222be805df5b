"""
Request models for the historical pricing endpoint.
"""

from enum import Enum
from typing import Optional

from .base import CamelModel


class Timeframe(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"
    HISTORICAL_10_YEAR = "historical-10year"


class PricingRequest(CamelModel):
    """Body of POST /historical-pricing."""
    timeframe: Timeframe
    # YYYY-MM-DD, required for custom only (validated by the service)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    # 0..100, checked by the service
    uptime_percentage: float = 100.0
