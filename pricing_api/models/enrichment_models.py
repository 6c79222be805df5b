"""
Outcome of a best-effort load enrichment attempt.

Enrichment either produces a timestamp-keyed lookup or an explicit skip with
a reason; it never surfaces as a pipeline exception.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Union

from .price_models import LoadReading


@dataclass
class EnrichedData:
    """Load values keyed by UTC hour beginning."""
    lookup: Dict[datetime, LoadReading] = field(default_factory=dict)

    @property
    def is_skipped(self) -> bool:
        return False


@dataclass
class EnrichmentSkipped:
    """Enrichment was not applied; ``reason`` says why."""
    reason: str

    @property
    def is_skipped(self) -> bool:
        return True


EnrichmentOutcome = Union[EnrichedData, EnrichmentSkipped]
