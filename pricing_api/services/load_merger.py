"""
Left-joins load enrichment onto price points.
"""

import logging
from typing import List

from ..models import PricePoint, EnrichmentOutcome, EnrichmentSkipped

logger = logging.getLogger(__name__)


def merge_load_data(points: List[PricePoint], outcome: EnrichmentOutcome) -> int:
    """
    Copy load/generation onto points whose UTC timestamp matches exactly.

    Points without a match keep their enrichment fields unset. Points are
    updated in place.

    Returns:
        int: Number of points that received enrichment values
    """
    if isinstance(outcome, EnrichmentSkipped):
        logger.warning(f"Load enrichment skipped: {outcome.reason}")
        return 0

    matched = 0
    for point in points:
        reading = outcome.lookup.get(point.timestamp)
        if reading is None:
            continue
        point.load = reading.load
        point.generation = reading.generation
        matched += 1

    logger.info(f"Enriched {matched} out of {len(points)} records with AIL data")
    return matched
