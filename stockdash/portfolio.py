from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Union

from .analytics import summarize
from .ledger import TransactionLedger
from .loaders import CsvUploadResult, Source, import_transactions, load_prices
from .models import AccountSnapshot, PerformancePoint, PricePoint, ReturnSummary
from .normalize import (
    DateLike,
    normalize_account_filter,
    normalize_symbol,
    parse_date,
    resolve_account,
)
from .performance import performance_series
from .prices import PriceSeriesStore
from .sync import Fetcher, PriceSyncResult, sync_prices
from .valuation import ValuationEngine


class Portfolio:
    """A multi-account portfolio over a transaction ledger and daily closes.

    Every read builds a fresh ``ValuationEngine`` over the ledger and price
    snapshot current at call time. Imports and syncs swap in new snapshots
    instead of mutating the old ones.
    """

    def __init__(
        self,
        ledger: Optional[TransactionLedger] = None,
        prices: Optional[PriceSeriesStore] = None,
    ) -> None:
        self.ledger = ledger or TransactionLedger()
        self.prices = prices or PriceSeriesStore()

    def engine(self) -> ValuationEngine:
        return ValuationEngine(self.ledger, self.prices)

    def daily_summary(self, as_of: DateLike = None) -> list[AccountSnapshot]:
        """Snapshot of every account as of ``as_of`` (default: latest price date)."""
        return self.engine().daily_summary(parse_date(as_of, "date"))

    def account_snapshot(self, account: str, as_of: DateLike) -> AccountSnapshot:
        return self.engine().account_snapshot(
            resolve_account(self.ledger.accounts(), account),
            parse_date(as_of, "date", required=True),
        )

    def performance(
        self,
        account: Optional[str] = None,
        start_date: DateLike = None,
        end_date: DateLike = None,
    ) -> list[PerformancePoint]:
        """Daily values for one account, or all of them combined for TOTAL.

        Args:
            account: Account name (case-insensitive). Blank or "TOTAL" means all.
            start_date: Inclusive start; defaults to the earliest price date.
            end_date: Inclusive end; defaults to the latest price date.

        Returns:
            One point per stored price date in range. An inverted range is empty.
        """
        return performance_series(
            self.engine(),
            normalize_account_filter(account),
            parse_date(start_date, "startDate"),
            parse_date(end_date, "endDate"),
        )

    def returns(
        self,
        account: Optional[str] = None,
        start_date: DateLike = None,
        end_date: DateLike = None,
    ) -> ReturnSummary:
        """Net gain/loss, return and CAGR over the performance window."""
        return summarize(self.performance(account, start_date, end_date))

    def history(
        self, symbol: str, start_date: DateLike = None, end_date: DateLike = None
    ) -> list[PricePoint]:
        """Stored closes for ``symbol``, newest first."""
        return self.prices.history(
            normalize_symbol(symbol),
            parse_date(start_date, "startDate"),
            parse_date(end_date, "endDate"),
        )

    def symbols(self) -> list[str]:
        """Symbols with purchase history."""
        return self.ledger.purchased_symbols()

    def import_transactions(self, source: Source) -> CsvUploadResult:
        self.ledger, result = import_transactions(source, existing=self.ledger)
        return result

    def sync_prices(
        self, stocks: Iterable[str], fetch: Fetcher, today: Optional[date] = None
    ) -> PriceSyncResult:
        result, self.prices = sync_prices(stocks, self.ledger, self.prices, fetch, today)
        return result

    @classmethod
    def from_csv(
        cls,
        transactions: Union[str, Path],
        prices: Optional[Union[str, Path]] = None,
    ) -> "Portfolio":
        """Create a Portfolio from a transactions CSV and an optional closes CSV."""
        portfolio = cls(prices=load_prices(prices) if prices else None)
        portfolio.import_transactions(transactions)
        return portfolio

    @classmethod
    def demo(cls) -> "Portfolio":
        from .demo import demo_ledger, demo_prices

        return cls(demo_ledger(), demo_prices())

    def __repr__(self) -> str:
        return (
            f"Portfolio(accounts={self.ledger.accounts()}, "
            f"transactions={len(self.ledger)}, "
            f"symbols={self.prices.symbols})"
        )
