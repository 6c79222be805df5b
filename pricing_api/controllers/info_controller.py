"""
Controller for API information and health endpoints.
"""

from fastapi import Depends

from .base_controller import BaseController, get_app_config
from ..config import ApplicationConfig
from ..models import APIInfo, HealthResponse


class InfoController(BaseController):
    """Controller for API information and health endpoints."""

    def _setup_routes(self):
        """Setup routes for API info and health."""

        @self.router.get("/", response_model=APIInfo, tags=["System Information"])
        async def get_api_info(config: ApplicationConfig = Depends(get_app_config)):
            """API root endpoint with basic information."""
            return APIInfo(
                message="Pool Price Analytics API",
                version=config.api.version,
                endpoints={
                    "historical_pricing": "/historical-pricing - Pool prices and analytics (POST)",
                    "health": "/health - Health check"
                }
            )

        @self.router.get("/health", response_model=HealthResponse, tags=["System Information"])
        async def health_check(config: ApplicationConfig = Depends(get_app_config)):
            """Health check endpoint."""
            return HealthResponse(
                status="healthy",
                service="pool-price-analytics-api",
                api_key_configured=config.has_api_key
            )
