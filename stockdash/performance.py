"""Multi-day portfolio value series broken out by holding."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from .config import DEFAULT_CONFIG
from .models import ZERO, PerformancePoint, StockPerformanceValue, round_money
from .valuation import ValuationEngine

logger = logging.getLogger(__name__)


def select_accounts(accounts: list[str], account_filter: str) -> list[str]:
    """All accounts for TOTAL, else the case-insensitive exact match (possibly none)."""
    if account_filter == DEFAULT_CONFIG.TOTAL_ACCOUNT:
        return list(accounts)
    return [a for a in accounts if a.upper() == account_filter]


def performance_series(
    engine: ValuationEngine,
    account_filter: str = DEFAULT_CONFIG.TOTAL_ACCOUNT,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[PerformancePoint]:
    """Build one point per stored price date within ``[start, end]``.

    Args:
        engine: Valuation engine over the ledger and price snapshot to use.
        account_filter: Upper-cased account name, or TOTAL for all accounts.
        start: First date, inclusive. Defaults to the earliest price date.
        end: Last date, inclusive. Defaults to the latest price date.

    Returns:
        Points in ascending date order. Dates on which the selected accounts
        hold nothing still appear, with a zero total and no stocks.
    """
    start = start or engine.store.first_date
    end = end or engine.store.last_date
    if start is None or end is None:
        return []

    accounts = select_accounts(engine.ledger.accounts(), account_filter)
    points: list[PerformancePoint] = []

    for day in engine.store.available_dates(start, end):
        by_symbol: dict[str, Decimal] = {}
        for account in accounts:
            for position in engine.positions_as_of(account, day):
                by_symbol[position.symbol] = round_money(
                    by_symbol.get(position.symbol, ZERO) + position.market_value
                )

        stocks = tuple(
            StockPerformanceValue(symbol=symbol, market_value=by_symbol[symbol])
            for symbol in sorted(by_symbol)
        )
        total = round_money(sum((s.market_value for s in stocks), start=ZERO))
        points.append(PerformancePoint(date=day, total_value=total, stocks=stocks))

    logger.debug(
        "Built %d performance points for %s (%d accounts) between %s and %s",
        len(points), account_filter, len(accounts), start, end,
    )
    return points
