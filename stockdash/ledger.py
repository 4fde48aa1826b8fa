"""Read-only view over the append-only transaction ledger."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Iterator, Optional

from .models import Transaction


class TransactionLedger:
    """Immutable, insertion-ordered list of BUY/SELL transactions."""

    def __init__(self, transactions: Iterable[Transaction] = ()) -> None:
        self._transactions: tuple[Transaction, ...] = tuple(transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def appended(self, transactions: Iterable[Transaction]) -> "TransactionLedger":
        return TransactionLedger([*self._transactions, *transactions])

    def accounts(self) -> list[str]:
        """Distinct account names in the ledger, sorted."""
        return sorted({tx.account for tx in self._transactions})

    def symbols(self) -> list[str]:
        return sorted({tx.symbol for tx in self._transactions})

    def purchased_symbols(self) -> list[str]:
        """Distinct symbols with at least one BUY, sorted."""
        return sorted({tx.symbol for tx in self._transactions if tx.side == "BUY"})

    def has_purchase_history(self, symbol: str) -> bool:
        return any(tx.symbol == symbol and tx.side == "BUY" for tx in self._transactions)

    def first_buy_date(self, symbol: str) -> Optional[date]:
        dates = [
            tx.date for tx in self._transactions if tx.symbol == symbol and tx.side == "BUY"
        ]
        return min(dates) if dates else None

    def for_account(self, account: str, as_of: date) -> Iterator[Transaction]:
        """Transactions of ``account`` dated on or before ``as_of``, in ledger order."""
        return (
            tx for tx in self._transactions if tx.account == account and tx.date <= as_of
        )

    def last_trade_price(self, symbol: str, as_of: date) -> Optional[Decimal]:
        """Execution price of the latest trade in ``symbol`` on or before ``as_of``.

        Scans every account. Same-date trades resolve to the one inserted last.
        """
        latest: Optional[Transaction] = None
        for tx in self._transactions:
            if tx.symbol != symbol or tx.date > as_of:
                continue
            if latest is None or tx.date >= latest.date:
                latest = tx
        return latest.price if latest else None

    def __repr__(self) -> str:
        return f"TransactionLedger(transactions={len(self)}, accounts={self.accounts()})"
