"""
Repository for hourly pool prices.
"""

from typing import List

from pydantic import ValidationError

from .base_repository import BaseRepository
from ..exceptions import ValidationFailure
from ..models import DateChunk, PricePoint, PoolPriceEnvelope, PoolPriceRecord, parse_decimal
from ..utils import parse_upstream_utc, market_time_for


class PoolPriceRepository(BaseRepository):
    """Fetches the Pool Price Report one date window at a time."""

    report_name = "Pool Price"

    def find_by_chunk(self, chunk: DateChunk) -> List[PricePoint]:
        """
        Fetch and normalize the pool prices for one window.

        Hours without a settled pool price (future hours) are dropped.

        Raises:
            ValidationFailure: The response envelope is not the expected shape
        """
        if chunk.span_days > self.upstream.max_window_days:
            raise ValidationFailure(
                f"Window {chunk} spans {chunk.span_days} days; "
                f"the pool price API allows at most {self.upstream.max_window_days}")

        payload = self._get_json(self.upstream.pool_price_url, chunk)
        records = self.unwrap(payload)
        self.logger.info(f"Received {len(records)} price records for {chunk}")

        points = []
        unsettled = 0
        malformed = 0
        for record in records:
            try:
                point = self.to_price_point(record)
            except ValueError:
                malformed += 1
                continue
            if point is None:
                unsettled += 1
                continue
            points.append(point)

        if unsettled:
            self.logger.info(f"Dropped {unsettled} unsettled hours for {chunk}")
        if malformed:
            self.logger.warning(f"Skipped {malformed} malformed price records for {chunk}")

        points.sort(key=lambda p: p.timestamp)
        return points

    @staticmethod
    def unwrap(payload) -> List[PoolPriceRecord]:
        """Return the report rows from the response envelope."""
        try:
            envelope = PoolPriceEnvelope.model_validate(payload)
        except ValidationError as e:
            raise ValidationFailure(
                "Unexpected pool price response: expected "
                "{'return': {'Pool Price Report': [...]}} envelope"
            ) from e
        return envelope.report.records

    @staticmethod
    def to_price_point(record: PoolPriceRecord):
        """
        Map one report row to a PricePoint, or None if not yet settled.

        Raises:
            ValueError: Missing or unparseable timestamp or price
        """
        price = parse_decimal(record.pool_price)
        if price is None:
            return None

        timestamp = parse_upstream_utc(record.begin_datetime_utc)
        return PricePoint(
            timestamp=timestamp,
            price=price,
            market_timestamp=market_time_for(timestamp, record.begin_datetime_mpt),
            forecast_price=parse_decimal(record.forecast_pool_price),
            rolling_30day_avg=parse_decimal(record.rolling_30day_avg)
        )
