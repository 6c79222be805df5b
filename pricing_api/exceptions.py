"""
Error taxonomy for the pricing pipeline.

Every failure the API reports to a caller is a ``PricingError`` carrying a
short category label, a human-readable detail and the HTTP status used when
rendering it.
"""

from typing import Optional


class PricingError(Exception):
    """Base class for classified pipeline failures."""

    category: str = "Pricing pipeline error"
    status_code: int = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.category, "details": self.detail}


class ConfigurationFailure(PricingError):
    """The upstream API key is not configured."""

    category = "AESO API key configuration error"
    status_code = 500


class AuthenticationFailure(PricingError):
    """Upstream rejected the API key (HTTP 401/403)."""

    category = "AESO API authentication failed"
    status_code = 502


class ValidationFailure(PricingError):
    """Bad date input, upstream HTTP 400 or an unexpected response envelope."""

    category = "Invalid request"
    status_code = 400


class EmptyResultFailure(PricingError):
    """No price data was obtained for the whole requested range."""

    category = "No historical data available"
    status_code = 404


class UpstreamFailure(PricingError):
    """Transport error or unclassified non-2xx upstream response."""

    category = "Failed to fetch AESO historical pricing data"
    status_code = 502

    def __init__(self, detail: str, upstream_status: Optional[int] = None):
        super().__init__(detail)
        self.upstream_status = upstream_status

    @property
    def retryable(self) -> bool:
        """Transport errors, throttling and server errors are worth retrying."""
        if self.upstream_status is None:
            return True
        return self.upstream_status == 429 or self.upstream_status >= 500
