"""Merge fetched daily closes into the price store and report per-symbol status."""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Callable, Iterable, Optional

from .config import DEFAULT_CONFIG
from .exceptions import InvalidInputError
from .ledger import TransactionLedger
from .models import PricePoint
from .normalize import normalize_symbol
from .prices import PriceSeriesStore

logger = logging.getLogger(__name__)


class SyncStatus(Enum):
    """Outcome reported for each requested symbol."""

    STORED = "stored"
    ALREADY_UP_TO_DATE = "already_up_to_date"
    NO_NEW_ROWS = "no_new_rows"
    NO_PURCHASE_HISTORY = "no_purchase_history"
    RATE_LIMITED = "rate_limited"
    NO_DATA = "no_data"
    UNKNOWN = "unknown"


class SeriesFetchStatus(Enum):
    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"
    INVALID_SYMBOL = "invalid_symbol"
    API_ERROR = "api_error"
    NO_DATA = "no_data"


@dataclass(frozen=True)
class SeriesFetchResult:
    status: SeriesFetchStatus
    series: dict[date, Decimal] = field(default_factory=dict)


Fetcher = Callable[[str], SeriesFetchResult]


@dataclass(frozen=True)
class PriceSyncResult:
    symbols_requested: int
    symbols_with_purchases: int
    prices_stored: int
    stored_by_symbol: dict[str, int]
    status_by_symbol: dict[str, SyncStatus]
    skipped_symbols: tuple[str, ...]


_EMPTY_FETCH_STATUS = {
    SeriesFetchStatus.RATE_LIMITED: SyncStatus.RATE_LIMITED,
    SeriesFetchStatus.NO_DATA: SyncStatus.NO_DATA,
    SeriesFetchStatus.SUCCESS: SyncStatus.NO_DATA,
}


def normalize_stocks(stocks: Optional[Iterable[str]]) -> list[str]:
    """Normalize and de-duplicate, keeping request order and dropping blanks."""
    normalized: dict[str, None] = {}
    for stock in stocks or ():
        if stock and stock.strip():
            normalized[normalize_symbol(stock, field="stocks")] = None
    if not normalized:
        raise InvalidInputError("stocks", "at least one non-blank symbol is required")
    return list(normalized)


def sync_prices(
    stocks: Iterable[str],
    ledger: TransactionLedger,
    store: PriceSeriesStore,
    fetch: Fetcher,
    today: Optional[date] = None,
) -> tuple[PriceSyncResult, PriceSeriesStore]:
    """Fetch and merge closes for the requested symbols.

    Only symbols bought at least once are fetched, and only closes dated after
    the first purchase are kept. A symbol whose latest stored close is no older
    than yesterday is not fetched at all.

    Args:
        stocks: Requested symbols, in any case.
        ledger: Ledger used for the purchase-history check.
        store: Current price snapshot; it is not modified.
        fetch: Returns the daily close series for one normalized symbol.
        today: Reference date for the up-to-date check. Defaults to today.

    Returns:
        The per-symbol report and a new store containing the merged closes.
    """
    symbols = normalize_stocks(stocks)
    today = today or date.today()
    fresh_after = today - timedelta(days=DEFAULT_CONFIG.UP_TO_DATE_LAG_DAYS)

    stored_by_symbol: dict[str, int] = {}
    status_by_symbol: dict[str, SyncStatus] = {}
    skipped: list[str] = []
    new_points: list[PricePoint] = []
    with_purchases = 0

    for symbol in symbols:
        first_buy = ledger.first_buy_date(symbol)
        if first_buy is None:
            skipped.append(symbol)
            status_by_symbol[symbol] = SyncStatus.NO_PURCHASE_HISTORY
            continue

        with_purchases += 1
        stored_by_symbol[symbol] = 0
        latest = store.latest_date(symbol)
        if latest is not None and latest >= fresh_after:
            status_by_symbol[symbol] = SyncStatus.ALREADY_UP_TO_DATE
            continue

        result = fetch(symbol)
        if not result.series:
            status = _EMPTY_FETCH_STATUS.get(result.status, SyncStatus.UNKNOWN)
            status_by_symbol[symbol] = status
            if status is SyncStatus.RATE_LIMITED:
                logger.warning("Price fetch for %s was rate limited", symbol)
            else:
                logger.warning("No price data returned for %s (%s)", symbol, result.status.value)
            continue

        existing = {p.date for p in store.points(symbol)}
        rows = [
            PricePoint(symbol=symbol, date=day, close_price=close)
            for day, close in sorted(result.series.items())
            if day > first_buy and day not in existing
        ]
        new_points.extend(rows)
        stored_by_symbol[symbol] = len(rows)
        status_by_symbol[symbol] = SyncStatus.STORED if rows else SyncStatus.NO_NEW_ROWS

    report = PriceSyncResult(
        symbols_requested=len(symbols),
        symbols_with_purchases=with_purchases,
        prices_stored=len(new_points),
        stored_by_symbol=stored_by_symbol,
        status_by_symbol=status_by_symbol,
        skipped_symbols=tuple(skipped),
    )
    logger.info(
        "Price sync stored %d closes across %d of %d symbols",
        report.prices_stored, with_purchases, len(symbols),
    )
    return report, store.merged(new_points) if new_points else store
