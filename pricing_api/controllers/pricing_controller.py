"""
Controller for historical pool price analytics.

Endpoints:
    - POST /historical-pricing: Fetch and analyze pool prices for a timeframe
"""

from typing import Iterator

import requests
from fastapi import Depends, HTTPException

from .base_controller import BaseController, get_app_config
from ..config import ApplicationConfig
from ..exceptions import PricingError
from ..models import PricingRequest, ErrorResponse
from ..repositories import PoolPriceRepository, LoadRepository
from ..services import HistoricalPricingService, PriceDataService
from ..utils import RetryPolicy


def get_pricing_service(
    config: ApplicationConfig = Depends(get_app_config)
) -> Iterator[HistoricalPricingService]:
    """Dependency injection for HistoricalPricingService (one session per request)."""
    session = requests.Session()
    try:
        retry_policy = RetryPolicy.from_config(config.retry)
        price_data_service = PriceDataService(
            config,
            PoolPriceRepository(config, session=session, retry_policy=retry_policy),
            LoadRepository(config, session=session, retry_policy=retry_policy)
        )
        yield HistoricalPricingService(config, price_data_service)
    finally:
        session.close()


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid dates or upstream rejected the date range"},
    404: {"model": ErrorResponse, "description": "No price data for the requested range"},
    500: {"model": ErrorResponse, "description": "API key not configured"},
    502: {"model": ErrorResponse, "description": "Upstream authentication or transport failure"},
}


class PricingController(BaseController):
    """Controller for historical pricing endpoints."""

    def _setup_routes(self):
        """Setup routes for historical pricing."""

        @self.router.post(
            "/historical-pricing",
            tags=["Historical Pricing"],
            summary="Historical pool prices with analytics",
            description="""
            Retrieve hourly pool prices for a timeframe and derive analytics.

            **Timeframes:**
            - **daily**: Last 24 hours with statistics, forecast and patterns
            - **monthly**: Last 30 days with daily chart, peak hours, hourly patterns and distribution
            - **yearly**: Last 12 months with monthly chart and seasonal patterns
            - **custom**: Raw hourly rows between startDate and endDate (YYYY-MM-DD)
            - **historical-10year**: One summary per calendar year, filtered to the cheapest
              `uptimePercentage` of hours

            Ranges longer than the upstream's 366-day window are fetched in chunks.
            """,
            responses=ERROR_RESPONSES
        )
        def get_historical_pricing(
            pricing_request: PricingRequest,
            service: HistoricalPricingService = Depends(get_pricing_service)
        ):
            """Run the pricing pipeline for one request."""
            try:
                return service.get_pricing(pricing_request)
            except (PricingError, HTTPException):
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving historical pricing")
