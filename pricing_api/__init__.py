"""
Pool price analytics API.

Retrieves long ranges of hourly electricity pool prices from the grid
operator, stitches multi-year series across the upstream's per-request
window limit and derives statistics, seasonal summaries, forecasts and
pattern flags for the market-pricing dashboards.
"""

__version__ = "1.0.0"
