"""Last execution price source, used when no close is stored."""

from datetime import date
from decimal import Decimal
from typing import Optional

from ..ledger import TransactionLedger
from .base import PriceSource


class LastTradePriceSource(PriceSource):
    """Execution price of the latest trade in the symbol across all accounts."""

    name = "last_trade"

    def __init__(self, ledger: TransactionLedger) -> None:
        self.ledger = ledger

    def price_on_or_before(self, symbol: str, day: date) -> Optional[Decimal]:
        return self.ledger.last_trade_price(symbol, day)
