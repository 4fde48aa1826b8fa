"""Bundled two-account demo portfolio, used when no data files are given."""

from datetime import date

from .ledger import TransactionLedger
from .models import PricePoint, Transaction
from .prices import PriceSeriesStore

DEMO_FEE = "1.00"

# (date, account, symbol, side, quantity, price)
_TRANSACTIONS = [
    ("2025-10-03", "DEMO_GROWTH", "AAPL", "BUY", "40", "185.25"),
    ("2025-10-03", "DEMO_GROWTH", "MSFT", "BUY", "22", "430.10"),
    ("2025-10-03", "DEMO_GROWTH", "NVDA", "BUY", "35", "120.75"),
    ("2025-11-07", "DEMO_GROWTH", "SPY", "BUY", "18", "589.32"),
    ("2025-11-07", "DEMO_GROWTH", "VTI", "BUY", "30", "283.11"),
    ("2025-12-12", "DEMO_GROWTH", "AAPL", "BUY", "10", "192.40"),
    ("2025-12-12", "DEMO_GROWTH", "NVDA", "SELL", "8", "132.05"),
    ("2026-01-17", "DEMO_GROWTH", "MSFT", "BUY", "6", "444.88"),
    ("2026-01-17", "DEMO_GROWTH", "SPY", "BUY", "4", "603.47"),
    ("2026-02-11", "DEMO_GROWTH", "VTI", "BUY", "6", "296.20"),
    ("2025-10-10", "DEMO_INCOME", "JNJ", "BUY", "38", "162.93"),
    ("2025-10-10", "DEMO_INCOME", "KO", "BUY", "80", "63.44"),
    ("2025-10-10", "DEMO_INCOME", "PG", "BUY", "26", "171.55"),
    ("2025-11-21", "DEMO_INCOME", "XLU", "BUY", "60", "74.32"),
    ("2025-11-21", "DEMO_INCOME", "SCHD", "BUY", "42", "83.90"),
    ("2025-12-19", "DEMO_INCOME", "KO", "BUY", "20", "64.15"),
    ("2025-12-19", "DEMO_INCOME", "JNJ", "SELL", "6", "165.02"),
    ("2026-01-24", "DEMO_INCOME", "PG", "BUY", "8", "174.30"),
    ("2026-01-24", "DEMO_INCOME", "SCHD", "BUY", "10", "85.10"),
    ("2026-02-12", "DEMO_INCOME", "XLU", "BUY", "12", "76.04"),
]

_GROWTH_DATES = ["2025-10-03", "2025-11-07", "2025-12-12", "2026-01-17", "2026-02-12", "2026-02-20"]
_INCOME_DATES = ["2025-10-10", "2025-11-21", "2025-12-19", "2026-01-24", "2026-02-12", "2026-02-20"]

_CLOSES: dict[str, tuple[list[str], list[str]]] = {
    "AAPL": (_GROWTH_DATES, ["185.25", "190.80", "192.40", "198.10", "201.60", "203.40"]),
    "MSFT": (_GROWTH_DATES, ["430.10", "438.70", "441.50", "444.88", "452.20", "456.90"]),
    "NVDA": (_GROWTH_DATES, ["120.75", "126.40", "132.05", "136.80", "141.30", "139.90"]),
    "SPY": (_GROWTH_DATES, ["583.20", "589.32", "598.60", "603.47", "610.80", "612.10"]),
    "VTI": (_GROWTH_DATES, ["279.40", "283.11", "289.90", "293.40", "296.20", "297.60"]),
    "JNJ": (_INCOME_DATES, ["162.93", "164.10", "165.02", "166.40", "167.20", "166.80"]),
    "KO": (_INCOME_DATES, ["63.44", "63.80", "64.15", "64.70", "65.10", "65.40"]),
    "PG": (_INCOME_DATES, ["171.55", "172.20", "173.40", "174.30", "175.60", "176.10"]),
    "XLU": (_INCOME_DATES, ["73.90", "74.32", "75.10", "75.70", "76.04", "76.30"]),
    "SCHD": (_INCOME_DATES, ["82.70", "83.90", "84.40", "85.10", "85.60", "85.90"]),
}


def demo_ledger() -> TransactionLedger:
    return TransactionLedger(
        Transaction(
            date=date.fromisoformat(day),
            account=account,
            symbol=symbol,
            side=side,  # type: ignore[arg-type]
            quantity=quantity,
            price=price,
            fee=DEMO_FEE,
        )
        for day, account, symbol, side, quantity, price in _TRANSACTIONS
    )


def demo_prices() -> PriceSeriesStore:
    return PriceSeriesStore(
        PricePoint(symbol=symbol, date=date.fromisoformat(day), close_price=close)
        for symbol, (days, closes) in _CLOSES.items()
        for day, close in zip(days, closes)
    )
