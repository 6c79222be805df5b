"""
Shared fixtures: configuration without delays and a retry policy that
records its waits instead of sleeping.
"""

import pytest

from pricing_api.config import ApplicationConfig, UpstreamConfig, RetryConfig, PipelineConfig
from pricing_api.utils import RetryPolicy


@pytest.fixture
def config():
    return ApplicationConfig(
        upstream=UpstreamConfig(api_key="test-key", base_url="https://aeso.test/public"),
        retry=RetryConfig(max_attempts=3, backoff_seconds=0.0),
        pipeline=PipelineConfig(inter_chunk_delay_seconds=0.0)
    )


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def retry_policy(config, sleeps):
    return RetryPolicy.from_config(config.retry, sleep=sleeps.append)
