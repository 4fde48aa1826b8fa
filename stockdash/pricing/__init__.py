"""Price source implementations."""

from .base import PriceSource, resolve_price
from .close import ClosePriceSource
from .trade import LastTradePriceSource

__all__ = [
    "PriceSource",
    "resolve_price",
    "ClosePriceSource",
    "LastTradePriceSource",
]
