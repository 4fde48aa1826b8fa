"""Data models for the portfolio valuation engine."""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from .config import DEFAULT_CONFIG, Side

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")


def to_decimal(value: Number) -> Decimal:
    """Convert ``value`` to Decimal, going through ``str`` so floats stay exact."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Number) -> Decimal:
    """Round to cents, half away from zero."""
    return to_decimal(value).quantize(DEFAULT_CONFIG.MONEY_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Transaction:
    """A single BUY or SELL in the ledger."""

    date: date
    account: str
    symbol: str
    side: Side
    quantity: Decimal
    price: Decimal
    fee: Decimal = ZERO

    def __post_init__(self) -> None:
        for name in ("quantity", "price", "fee"):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))

    @property
    def signed_quantity(self) -> Decimal:
        return self.quantity if self.side == "BUY" else -self.quantity

    def __str__(self) -> str:
        return (
            f"{self.date.isoformat()} {self.account} {self.side} {self.quantity} "
            f"{self.symbol} @ ${self.price:.2f} (fee ${self.fee:.2f})"
        )


@dataclass(frozen=True)
class PricePoint:
    """A daily close for one symbol."""

    symbol: str
    date: date
    close_price: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "close_price", to_decimal(self.close_price))


@dataclass(frozen=True)
class PositionValue:
    """An open holding valued as of a date."""

    symbol: str
    quantity: Decimal
    current_price: Decimal
    market_value: Decimal


@dataclass(frozen=True)
class AccountSnapshot:
    account_name: str
    as_of_date: date
    total_value: Decimal
    positions: tuple[PositionValue, ...] = ()


@dataclass(frozen=True)
class StockPerformanceValue:
    symbol: str
    market_value: Decimal


@dataclass(frozen=True)
class PerformancePoint:
    date: date
    total_value: Decimal
    stocks: tuple[StockPerformanceValue, ...] = ()


@dataclass(frozen=True)
class ReturnSummary:
    """Return figures between the first and last point of a window.

    ``total_return`` and ``cagr`` are ``None`` when not available.
    """

    start_date: Optional[date]
    end_date: Optional[date]
    start_value: Decimal
    end_value: Decimal
    net_gain_loss: Decimal
    total_return: Optional[Decimal]
    cagr: Optional[Decimal]
