"""Position reconstruction and account valuation from the ledger."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from .ledger import TransactionLedger
from .models import ZERO, AccountSnapshot, PositionValue, Transaction, round_money
from .prices import PriceSeriesStore
from .pricing import ClosePriceSource, LastTradePriceSource, PriceSource, resolve_price

logger = logging.getLogger(__name__)


@dataclass
class _PositionAccumulator:
    quantity: Decimal = ZERO
    fees: Decimal = ZERO

    def apply(self, tx: Transaction) -> None:
        self.quantity += tx.signed_quantity
        # Fees accumulate on both sides.
        self.fees += tx.fee


class ValuationEngine:
    """Values accounts by replaying the ledger up to an as-of date.

    Nothing is cached: every call rebuilds positions from the ledger and the
    price store it was given, so concurrent calls over the same inputs are safe.
    """

    def __init__(
        self,
        ledger: TransactionLedger,
        store: PriceSeriesStore,
        sources: Optional[Sequence[PriceSource]] = None,
    ) -> None:
        self.ledger = ledger
        self.store = store
        if sources is None:
            sources = (ClosePriceSource(store), LastTradePriceSource(ledger))
        self.sources = tuple(sources)

    def positions_as_of(self, account: str, as_of: date) -> list[PositionValue]:
        """Open positions of ``account`` on ``as_of``, sorted by symbol.

        Symbols whose net quantity is zero or negative are dropped. Market value
        is ``quantity * price - cumulative fees``, rounded to cents.
        """
        accumulators: dict[str, _PositionAccumulator] = {}
        for tx in self.ledger.for_account(account, as_of):
            accumulators.setdefault(tx.symbol, _PositionAccumulator()).apply(tx)

        positions: list[PositionValue] = []
        for symbol in sorted(accumulators):
            acc = accumulators[symbol]
            if acc.quantity <= 0:
                continue
            price = resolve_price(self.sources, symbol, as_of)
            positions.append(
                PositionValue(
                    symbol=symbol,
                    quantity=acc.quantity,
                    current_price=round_money(price),
                    market_value=round_money(acc.quantity * price - acc.fees),
                )
            )
        return positions

    def account_snapshot(self, account: str, as_of: date) -> AccountSnapshot:
        positions = self.positions_as_of(account, as_of)
        total = round_money(sum((p.market_value for p in positions), start=ZERO))
        return AccountSnapshot(
            account_name=account,
            as_of_date=as_of,
            total_value=total,
            positions=tuple(positions),
        )

    def default_as_of(self) -> Optional[date]:
        """Latest stored price date, else the latest trade date."""
        if self.store.last_date is not None:
            return self.store.last_date
        return max((tx.date for tx in self.ledger), default=None)

    def daily_summary(self, as_of: Optional[date] = None) -> list[AccountSnapshot]:
        """One snapshot per ledger account, sorted by name, empty accounts included."""
        as_of = as_of or self.default_as_of()
        if as_of is None:
            return []

        snapshots = [self.account_snapshot(account, as_of) for account in self.ledger.accounts()]
        logger.debug("Valued %d accounts as of %s", len(snapshots), as_of)
        return snapshots
