"""
Service that assembles a continuous price series from windowed fetches.
"""

import time
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List

from .base_service import BaseService
from .load_merger import merge_load_data
from .range_planner import plan_date_chunks
from ..config import ApplicationConfig
from ..exceptions import (
    PricingError, AuthenticationFailure, ConfigurationFailure, EmptyResultFailure,
    ValidationFailure
)
from ..models import DateChunk, PricePoint
from ..repositories import PoolPriceRepository, LoadRepository


@dataclass
class ChunkFailure:
    """A window that could not be fetched."""
    chunk: DateChunk
    error: str


@dataclass
class SeriesFetchResult:
    """Concatenated points plus the windows that failed."""
    points: List[PricePoint] = field(default_factory=list)
    chunks: List[DateChunk] = field(default_factory=list)
    failures: List[ChunkFailure] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return bool(self.failures)


class PriceDataService(BaseService):
    """
    Drives the range planner, the price fetcher and the load enricher.

    Windows are fetched sequentially with a fixed delay in between. When a
    range needs several windows, a failing window is logged and recorded
    while the others continue; authentication and configuration failures
    abort immediately since every window would fail the same way.
    """

    def __init__(
        self,
        config: ApplicationConfig,
        price_repository: PoolPriceRepository,
        load_repository: LoadRepository = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        super().__init__(price_repository)
        self.config = config
        self.load_repository = load_repository
        self.sleep = sleep

    def validate_input(self, **kwargs) -> bool:
        # Date ordering is validated in plan()
        return True

    def plan(self, start: date, end: date) -> List[DateChunk]:
        """Single window when it fits, otherwise planned chunks."""
        if (end - start).days > self.config.pipeline.custom_chunk_threshold_days:
            chunks = plan_date_chunks(
                start, end,
                max_window_days=self.config.upstream.max_window_days,
                chunk_months=self.config.pipeline.chunk_months
            )
            self.logger.info(
                f"Range {start}..{end} split into {len(chunks)} chunks")
            return chunks
        if start > end:
            raise ValidationFailure(
                f"Start date {start.isoformat()} is after end date {end.isoformat()}")
        return [DateChunk(start=start, end=end)]

    def fetch_chunk(self, chunk: DateChunk, enrich: bool = True) -> List[PricePoint]:
        """Fetch one window and enrich it with load data when available."""
        points = self.repository.find_by_chunk(chunk)
        if enrich and points and self.load_repository is not None:
            outcome = self.load_repository.fetch_load_lookup(chunk)
            merge_load_data(points, outcome)
        return points

    def fetch_range(self, start: date, end: date, enrich: bool = True) -> SeriesFetchResult:
        """
        Fetch ``[start, end]`` as one chronologically ordered series.

        Raises:
            EmptyResultFailure: No window produced any data
            PricingError: The only window failed (propagated with its class)
        """
        chunks = self.plan(start, end)
        result = SeriesFetchResult(chunks=chunks)

        for index, chunk in enumerate(chunks):
            if index > 0:
                self.sleep(self.config.pipeline.inter_chunk_delay_seconds)
            try:
                chunk_points = self.fetch_chunk(chunk, enrich=enrich)
            except (AuthenticationFailure, ConfigurationFailure):
                raise
            except PricingError as e:
                if len(chunks) == 1:
                    raise
                self.logger.warning(f"✗ Error fetching chunk {chunk}: {e.detail}")
                result.failures.append(ChunkFailure(chunk=chunk, error=e.detail))
                continue

            self.logger.info(f"✓ Fetched {len(chunk_points)} data points for {chunk}")
            result.points.extend(chunk_points)

        result.points.sort(key=lambda p: p.timestamp)
        self.logger.info(
            f"Total data points fetched across {len(chunks)} chunks: {len(result.points)}")

        if not result.points:
            detail = f"No price data returned for {start.isoformat()} to {end.isoformat()}"
            if result.failures:
                detail += f" ({len(result.failures)} of {len(chunks)} chunks failed)"
            raise EmptyResultFailure(detail)

        return result
