from datetime import date
from decimal import Decimal

import pytest

from stockdash.ledger import TransactionLedger
from stockdash.models import PricePoint, Transaction
from stockdash.portfolio import Portfolio
from stockdash.prices import PriceSeriesStore


def tx(day, symbol, side="BUY", quantity="10", price="100", fee="0", account="MAIN"):
    """Shorthand for a ledger entry; numbers may be given as strings."""
    return Transaction(
        date=date.fromisoformat(day),
        account=account,
        symbol=symbol,
        side=side,
        quantity=Decimal(quantity),
        price=Decimal(price),
        fee=Decimal(fee),
    )


def closes(symbol, *rows):
    """PricePoints for ``symbol`` from (iso_date, close) pairs."""
    return [
        PricePoint(symbol=symbol, date=date.fromisoformat(day), close_price=Decimal(close))
        for day, close in rows
    ]


@pytest.fixture
def aapl_ledger() -> TransactionLedger:
    return TransactionLedger([tx("2025-01-01", "AAPL", quantity="10", price="150", fee="1")])


@pytest.fixture
def aapl_prices() -> PriceSeriesStore:
    return PriceSeriesStore(closes("AAPL", ("2025-01-01", "150"), ("2025-02-01", "165")))


@pytest.fixture
def demo_portfolio() -> Portfolio:
    return Portfolio.demo()
