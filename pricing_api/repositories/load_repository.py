"""
Repository for Alberta internal load (AIL), used to enrich price points.
"""

from pydantic import ValidationError

from .base_repository import BaseRepository
from ..exceptions import PricingError
from ..models import (
    DateChunk, LoadEnvelope, LoadReading, EnrichedData, EnrichmentSkipped,
    EnrichmentOutcome, parse_decimal
)
from ..utils import parse_upstream_utc


class LoadRepository(BaseRepository):
    """
    Best-effort access to the Actual Forecast Report.

    Older ranges are frequently unavailable upstream, so every failure is
    returned as an ``EnrichmentSkipped`` outcome instead of being raised.
    """

    report_name = "AIL"

    def fetch_load_lookup(self, chunk: DateChunk) -> EnrichmentOutcome:
        """Return a UTC-timestamp keyed load lookup for the window, or a skip."""
        if not self.config.pipeline.enrichment_enabled:
            return EnrichmentSkipped("enrichment disabled")

        if chunk.span_days > self.upstream.enrichment_max_window_days:
            return EnrichmentSkipped(
                f"window spans {chunk.span_days} days, load API allows "
                f"{self.upstream.enrichment_max_window_days}")

        try:
            payload = self._get_json(self.upstream.load_url, chunk)
        except PricingError as e:
            return EnrichmentSkipped(f"{e.category}: {e.detail}")

        try:
            envelope = LoadEnvelope.model_validate(payload)
        except ValidationError:
            return EnrichmentSkipped("load response missing 'Actual Forecast Report' envelope")

        records = envelope.report.records
        if not records:
            return EnrichmentSkipped(f"no load data available for {chunk}")

        lookup = {}
        for record in records:
            try:
                load = parse_decimal(record.alberta_internal_load)
                timestamp = parse_upstream_utc(record.begin_datetime_utc)
            except ValueError:
                continue
            if load is None or load <= 0:
                continue
            # Generation is not published by this report
            lookup[timestamp] = LoadReading(load=load)

        if not lookup:
            return EnrichmentSkipped(f"no usable load values for {chunk}")

        self.logger.info(f"Received {len(lookup)} load values for {chunk}")
        return EnrichedData(lookup=lookup)
