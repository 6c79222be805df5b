"""
Configuration package for application settings.
"""

from .settings import (
    API_KEY_ENV_VARS,
    ApplicationConfig,
    APIConfig,
    UpstreamConfig,
    RetryConfig,
    PipelineConfig
)

__all__ = [
    "API_KEY_ENV_VARS",
    "ApplicationConfig",
    "APIConfig",
    "UpstreamConfig",
    "RetryConfig",
    "PipelineConfig"
]
