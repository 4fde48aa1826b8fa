"""Abstract base class for price sources."""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..models import ZERO


class PriceSource(ABC):
    """A way of finding the effective price of a symbol on a given day."""

    name: str = "abstract"

    @abstractmethod
    def price_on_or_before(self, symbol: str, day: date) -> Optional[Decimal]:
        """Return the price to use for ``symbol`` on ``day``.

        Args:
            symbol: Normalized ticker.
            day: As-of date; nothing dated after it may be used.

        Returns:
            The price, or None when this source has nothing on or before ``day``.
        """
        pass


def resolve_price(sources: Sequence[PriceSource], symbol: str, day: date) -> Decimal:
    """First price any source yields, in order; zero when none has one."""
    for source in sources:
        price = source.price_on_or_before(symbol, day)
        if price is not None:
            return price
    return ZERO
