"""
Base repository for grid-operator API access.
"""

import logging
from abc import ABC
from typing import Any, Optional

import requests

from ..config import ApplicationConfig
from ..exceptions import AuthenticationFailure, UpstreamFailure, ValidationFailure
from ..models import DateChunk
from ..utils import RetryPolicy, format_upstream_date


class BaseRepository(ABC):
    """
    Shared HTTP plumbing for upstream report APIs.

    Sends one GET per date window with the API key header, classifies
    non-2xx responses into the pipeline's error taxonomy and retries
    transient failures through the configured ``RetryPolicy``.
    """

    report_name: str = "upstream"

    def __init__(
        self,
        config: ApplicationConfig,
        session: Optional[requests.Session] = None,
        retry_policy: Optional[RetryPolicy] = None
    ):
        self.config = config
        self.upstream = config.upstream
        self.session = session or requests.Session()
        self.retry_policy = retry_policy or RetryPolicy.from_config(config.retry)
        self.logger = logging.getLogger(self.__class__.__module__)

    def _get_json(self, url: str, chunk: DateChunk) -> Any:
        """
        Fetch one date window and return the decoded JSON body.

        Raises:
            ConfigurationFailure: No API key configured
            AuthenticationFailure: HTTP 401/403
            ValidationFailure: HTTP 400
            UpstreamFailure: Transport error or any other non-2xx status
        """
        api_key = self.upstream.require_api_key()
        params = {
            "startDate": format_upstream_date(chunk.start),
            "endDate": format_upstream_date(chunk.end),
        }
        headers = {
            self.upstream.api_key_header: api_key,
            "Accept": "application/json",
        }

        def send() -> Any:
            self.logger.info(f"Fetching {self.report_name} for {chunk}")
            try:
                response = self.session.get(
                    url,
                    params=params,
                    headers=headers,
                    timeout=self.upstream.timeout_seconds
                )
            except requests.RequestException as e:
                raise UpstreamFailure(
                    f"{self.report_name} request for {chunk} failed: {e}") from e

            if not response.ok:
                self._raise_for_status(response, chunk)

            try:
                return response.json()
            except ValueError as e:
                raise UpstreamFailure(
                    f"{self.report_name} returned invalid JSON for {chunk}",
                    upstream_status=response.status_code
                ) from e

        return self.retry_policy.call(send, f"{self.report_name} {chunk}")

    def _raise_for_status(self, response: requests.Response, chunk: DateChunk) -> None:
        """Translate a non-2xx response into a classified error."""
        status = response.status_code
        self.logger.error(
            f"{self.report_name} API error ({status}) for {chunk}: {response.text[:500]}")

        if status == 401:
            raise AuthenticationFailure(
                "Invalid or missing API subscription key. Please verify your AESO API credentials.")
        if status == 403:
            raise AuthenticationFailure(
                "AESO API access forbidden. Your API key may not have access to this endpoint.")
        if status == 400:
            raise ValidationFailure(
                "Invalid date range. Please ensure dates are in YYYY-MM-DD format and within allowed limits.")
        raise UpstreamFailure(
            f"AESO {self.report_name} API error: {status}", upstream_status=status)
