"""
This module creates and configures the main FastAPI application for the
Pool Price Analytics API. It serves historical wholesale electricity pool
prices for the Alberta market together with derived analytics.

Tags:
    - fastapi
    - pool-prices
    - data-analysis
    - rest-api

Features:
    - Trailing daily, monthly and yearly analytics
    - Custom date ranges of any length (fetched in chunks)
    - Multi-year summaries with an uptime filter
    - Comprehensive Swagger documentation
    - CORS-enabled for web applications

API Categories:
    - Information: System health and API metadata
    - Historical Pricing: Price series, statistics, forecasts and patterns
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import ApplicationConfig
from .controllers import PoolPriceController
from .exceptions import PricingError, ValidationFailure

logger = logging.getLogger(__name__)


def create_app(config: ApplicationConfig = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    This function initializes the FastAPI application with:
    - Configuration resolved once and stored on ``app.state.config``
    - Logging configured from ``config.api.log_level``
    - CORS middleware for cross-origin requests
    - Structured ``{"error", "details"}`` bodies for classified failures
    - OpenAPI/Swagger documentation at /docs

    Args:
        config (ApplicationConfig): Configuration to use; read from the
            environment and ``.env`` when omitted

    Returns:
        FastAPI: Configured FastAPI application instance ready for deployment.
    """
    config = config or ApplicationConfig.from_env()

    logging.basicConfig(
        level=getattr(logging, config.api.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = FastAPI(
        title=config.api.title,
        description=config.api.description,
        version=config.api.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "System Information",
                "description": "API health, version info, and system status endpoints"
            },
            {
                "name": "Historical Pricing",
                "description": "Pool price series with statistics, seasonal patterns, forecasts and rollups"
            }
        ]
    )
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.allow_origins,
        allow_credentials=config.api.allow_credentials,
        allow_methods=config.api.allow_methods,
        allow_headers=config.api.allow_headers,
    )

    @app.exception_handler(PricingError)
    async def pricing_error_handler(request: Request, exc: PricingError):
        if exc.status_code >= 500:
            logger.error(f"{exc.category}: {exc.detail}")
        else:
            logger.warning(f"{exc.category}: {exc.detail}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        messages = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        failure = ValidationFailure(messages)
        return JSONResponse(status_code=failure.status_code, content=failure.to_dict())

    app.include_router(
        PoolPriceController().router,
        prefix="/api",
    )

    logger.info(
        f"Application created (API key configured: {config.has_api_key})")
    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=app.state.config.api.host,
        port=app.state.config.api.port,
        reload=app.state.config.api.reload
    )
