"""Configuration constants for the portfolio valuation engine."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

Side = Literal["BUY", "SELL"]

SIDES: tuple[Side, ...] = ("BUY", "SELL")


@dataclass(frozen=True)
class EngineConfig:
    """Constants shared by valuation, analytics and sync."""

    TOTAL_ACCOUNT: str = "TOTAL"
    MONEY_QUANTUM: Decimal = Decimal("0.01")
    DAYS_PER_YEAR: Decimal = Decimal("365.2425")
    UP_TO_DATE_LAG_DAYS: int = 1
    SYMBOL_ALIASES: dict[str, str] = field(default_factory=lambda: {"KLA": "KLAC"})


DEFAULT_CONFIG = EngineConfig()
