"""
Repository package for upstream data access.
"""

from .base_repository import BaseRepository
from .pool_price_repository import PoolPriceRepository
from .load_repository import LoadRepository

__all__ = [
    "BaseRepository",
    "PoolPriceRepository",
    "LoadRepository"
]
