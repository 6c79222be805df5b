"""
Application configuration settings.

Configuration is built once (see ``ApplicationConfig.from_env``) and handed
to repositories and services explicitly, so nothing reads the process
environment while a request is being served.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from ..exceptions import ConfigurationFailure

# Checked in this order; the first non-empty value wins.
API_KEY_ENV_VARS = (
    "AESO_SUBSCRIPTION_KEY_PRIMARY",
    "AESO_API_KEY",
    "AESO_SUB_KEY",
    "AESO_SUBSCRIPTION_KEY_SECONDARY",
)


class APIConfig(BaseModel):
    """API configuration settings."""

    title: str = "Pool Price Analytics API"
    description: str = "REST API for historical electricity pool prices with multi-year aggregation and analytics"
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    log_level: str = "INFO"

    # CORS settings
    allow_origins: list = ["*"]
    allow_credentials: bool = True
    allow_methods: list = ["*"]
    allow_headers: list = ["*"]


class UpstreamConfig(BaseModel):
    """Grid-operator API settings."""

    base_url: str = "https://apimgw.aeso.ca/public"
    pool_price_path: str = "poolprice-api/v1.1/price/poolPrice"
    load_path: str = "actualforecast-api/v1/load/albertaInternalLoad"
    api_key_header: str = "API-KEY"
    api_key: Optional[str] = None
    timeout_seconds: int = 30

    # Hard per-request window enforced by the pool price API
    max_window_days: int = 366
    # The load API has its own limit
    enrichment_max_window_days: int = 366

    @property
    def pool_price_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.pool_price_path}"

    @property
    def load_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.load_path}"

    def require_api_key(self) -> str:
        """Return the API key or fail with a configuration error."""
        if not self.api_key:
            raise ConfigurationFailure(
                "No AESO API key configured. Set one of: "
                + ", ".join(API_KEY_ENV_VARS)
            )
        return self.api_key


class RetryConfig(BaseModel):
    """Retry/backoff settings shared by every upstream call."""

    max_attempts: int = 3
    backoff_seconds: float = 1.0
    backoff_multiplier: float = 2.0
    max_backoff_seconds: float = 30.0


class PipelineConfig(BaseModel):
    """Settings for the fetch and analytics pipeline."""

    chunk_months: int = 11
    inter_chunk_delay_seconds: float = 0.5
    historical_years: int = 8
    monthly_days: int = 30
    custom_chunk_threshold_days: int = 366
    forecast_horizon_hours: int = 24
    forecast_window_hours: int = 168
    enrichment_enabled: bool = True


class ApplicationConfig:
    """Main application configuration."""

    def __init__(
        self,
        api: APIConfig = None,
        upstream: UpstreamConfig = None,
        retry: RetryConfig = None,
        pipeline: PipelineConfig = None
    ):
        self.api = api or APIConfig()
        self.upstream = upstream or UpstreamConfig()
        self.retry = retry or RetryConfig()
        self.pipeline = pipeline or PipelineConfig()

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None, environ: dict = None) -> "ApplicationConfig":
        """
        Build configuration from a .env file and the process environment.

        Args:
            env_path: Optional .env location (defaults to the project root)
            environ: Mapping to read instead of os.environ

        Returns:
            ApplicationConfig: Fully resolved configuration
        """
        if environ is None:
            env_path = env_path or Path(__file__).resolve().parents[2] / ".env"
            load_dotenv(env_path)
            environ = os.environ

        api_key = next(
            (environ[name] for name in API_KEY_ENV_VARS if environ.get(name)),
            None
        )

        upstream = UpstreamConfig(api_key=api_key)
        if environ.get("AESO_BASE_URL"):
            upstream.base_url = environ["AESO_BASE_URL"]

        api = APIConfig()
        if environ.get("PRICING_LOG_LEVEL"):
            api.log_level = environ["PRICING_LOG_LEVEL"].upper()

        pipeline = PipelineConfig()
        if environ.get("PRICING_CHUNK_DELAY_SECONDS"):
            pipeline.inter_chunk_delay_seconds = float(
                environ["PRICING_CHUNK_DELAY_SECONDS"])

        return cls(api=api, upstream=upstream, pipeline=pipeline)

    @property
    def has_api_key(self) -> bool:
        """Check if an upstream API key is configured."""
        return bool(self.upstream.api_key)
