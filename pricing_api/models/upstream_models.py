"""
Typed schemas for the grid operator's response envelopes.

Both report APIs wrap their rows as ``{"return": {"<Report Name>": [...]}}``.
Values are usually encoded as strings but plain JSON numbers are accepted
too. A missing envelope key is a validation error, not an empty result;
a bad row is left for the repository to skip.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Upstream numeric value: "53.20", 53.2 or "" when not yet published
Decimalish = Optional[Union[str, float]]


def parse_decimal(value: Decimalish) -> Optional[float]:
    """Convert an upstream numeric value to float; empty means absent."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    value = value.strip()
    if value == "":
        return None
    return float(value)


class PoolPriceRecord(BaseModel):
    """Row of the Pool Price Report."""
    model_config = ConfigDict(extra="ignore")

    # Missing timestamps are counted as malformed rows by the repository
    begin_datetime_utc: Optional[str] = None
    begin_datetime_mpt: Optional[str] = None
    pool_price: Decimalish = None
    forecast_pool_price: Decimalish = None
    rolling_30day_avg: Decimalish = None


class PoolPriceReport(BaseModel):
    records: List[PoolPriceRecord] = Field(alias="Pool Price Report")


class PoolPriceEnvelope(BaseModel):
    report: PoolPriceReport = Field(alias="return")


class LoadRecord(BaseModel):
    """Row of the Actual Forecast Report."""
    model_config = ConfigDict(extra="ignore")

    begin_datetime_utc: Optional[str] = None
    begin_datetime_mpt: Optional[str] = None
    alberta_internal_load: Decimalish = None
    forecast_alberta_internal_load: Decimalish = None


class LoadReport(BaseModel):
    records: List[LoadRecord] = Field(alias="Actual Forecast Report")


class LoadEnvelope(BaseModel):
    report: LoadReport = Field(alias="return")
