"""
Stockdash - valuation and performance analytics for a multi-account stock portfolio.

Exports:
    Transaction: Dataclass for a BUY/SELL ledger entry
    PricePoint: Dataclass for a daily close
    TransactionLedger: Read-only view over the transaction list
    PriceSeriesStore: Read-only view over per-symbol daily closes
    ValuationEngine: Position reconstruction and daily account summaries
    Portfolio: Facade exposing summary, performance, history and sync
    compute_return / compute_cagr: Return analytics between two valuations
"""

from .analytics import compute_cagr, compute_return, days_between, summarize
from .exceptions import CsvImportError, InvalidInputError
from .ledger import TransactionLedger
from .models import (
    AccountSnapshot,
    PerformancePoint,
    PositionValue,
    PricePoint,
    ReturnSummary,
    StockPerformanceValue,
    Transaction,
)
from .portfolio import Portfolio
from .prices import PriceSeriesStore
from .valuation import ValuationEngine

__all__ = [
    "Transaction",
    "PricePoint",
    "PositionValue",
    "AccountSnapshot",
    "StockPerformanceValue",
    "PerformancePoint",
    "ReturnSummary",
    "TransactionLedger",
    "PriceSeriesStore",
    "ValuationEngine",
    "Portfolio",
    "compute_return",
    "compute_cagr",
    "days_between",
    "summarize",
    "InvalidInputError",
    "CsvImportError",
]
