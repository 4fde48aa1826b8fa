"""Daily close price source."""

from datetime import date
from decimal import Decimal
from typing import Optional

from ..prices import PriceSeriesStore
from .base import PriceSource


class ClosePriceSource(PriceSource):
    """Most recent stored close on or before the day.

    Missing days carry the prior close forward; there is no interpolation and
    no look-ahead to the next available close.
    """

    name = "close"

    def __init__(self, store: PriceSeriesStore) -> None:
        self.store = store

    def price_on_or_before(self, symbol: str, day: date) -> Optional[Decimal]:
        return self.store.as_of_close(symbol, day)
