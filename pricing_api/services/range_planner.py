"""
Splits long date ranges into upstream-compliant windows.
"""

from datetime import date, timedelta
from typing import List

import pandas as pd

from ..exceptions import ValidationFailure
from ..models import DateChunk


def plan_date_chunks(start: date, end: date, max_window_days: int,
                     chunk_months: int = 11) -> List[DateChunk]:
    """
    Cover ``[start, end]`` with contiguous, non-overlapping windows.

    Each window advances ``chunk_months`` calendar months from its start,
    staying below the upstream limit, and is never longer than
    ``max_window_days``. The last window is clamped to ``end``; the next
    window always starts the day after the previous one ends.

    Args:
        start: First day of the range (inclusive)
        end: Last day of the range (inclusive)
        max_window_days: Maximum ``end - start`` of a single window in days
        chunk_months: Preferred window length in calendar months

    Returns:
        List[DateChunk]: At least one window; ``start == end`` yields one
        single-day window.

    Raises:
        ValidationFailure: If ``start`` is after ``end``
    """
    if start > end:
        raise ValidationFailure(
            f"Start date {start.isoformat()} is after end date {end.isoformat()}")
    if max_window_days < 0:
        raise ValidationFailure("max_window_days must not be negative")

    chunks = []
    current = start
    while current <= end:
        by_months = (pd.Timestamp(current) + pd.DateOffset(months=chunk_months)).date()
        chunk_end = min(by_months, current + timedelta(days=max_window_days), end)
        chunks.append(DateChunk(start=current, end=chunk_end))
        current = chunk_end + timedelta(days=1)

    return chunks
