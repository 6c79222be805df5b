"""
Controllers package for API endpoint handlers.
Imports all controllers for easy access.
"""

from fastapi import APIRouter

# Base controller
from .base_controller import BaseController, get_app_config

# Individual controllers
from .info_controller import InfoController
from .pricing_controller import PricingController, get_pricing_service


class PoolPriceController:
    """
    Aggregate controller that combines all API controllers under one router.
    """

    def __init__(self):
        """Initialize aggregate controller with all sub-controllers."""
        self.router = APIRouter()

        # Initialize individual controllers
        self.info_controller = InfoController()
        self.pricing_controller = PricingController()

        # Include all routers
        self._setup_aggregate_routes()

    def _setup_aggregate_routes(self):
        """Setup aggregate routes by including all controller routers."""
        self.router.include_router(self.info_controller.router)
        self.router.include_router(self.pricing_controller.router)


__all__ = [
    # Base controller
    "BaseController",
    "get_app_config",

    # Individual controllers
    "InfoController",
    "PricingController",
    "get_pricing_service",

    # Aggregate controller
    "PoolPriceController"
]
