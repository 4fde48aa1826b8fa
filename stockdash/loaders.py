"""Loaders for importing ledger and price data from CSV files."""

import csv
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from .config import SIDES
from .exceptions import CsvImportError, InvalidInputError
from .ledger import TransactionLedger
from .models import PricePoint, Transaction
from .normalize import normalize_symbol
from .prices import PriceSeriesStore

logger = logging.getLogger(__name__)

Source = Union[str, Path, TextIO]

TRANSACTION_HEADERS = ("trade_date", "account", "symbol", "type", "quantity", "price", "fee")
PRICE_HEADERS = ("symbol", "date", "close_price")


@dataclass(frozen=True)
class CsvUploadResult:
    """Outcome of a transaction import."""

    imported_count: int
    skipped_count: int
    accounts_affected: tuple[str, ...]


@contextmanager
def _open(source: Source) -> Iterator[TextIO]:
    if hasattr(source, "read"):
        yield source  # type: ignore[misc]
        return
    try:
        handle = open(source, newline="", encoding="utf-8")
    except OSError as e:
        raise CsvImportError(f"Unable to read CSV file {source}: {e}") from e
    with handle:
        try:
            yield handle
        except UnicodeDecodeError as e:
            raise CsvImportError(f"Unable to read CSV file {source}: {e}") from e


class _CsvRows:
    """DictReader wrapper with case-insensitive, trimmed headers and typed getters."""

    def __init__(self, handle: TextIO, required: tuple[str, ...]) -> None:
        self.reader = csv.DictReader(handle)
        provided = {
            (name or "").strip().lower(): name for name in (self.reader.fieldnames or [])
        }
        missing = [h for h in required if h not in provided]
        if missing:
            raise CsvImportError(f"CSV must include headers: {', '.join(required)}")
        self.columns = provided

    def __iter__(self) -> Iterator[tuple[int, dict[str, str]]]:
        # Header is line 1, so the first data record is row 2.
        for index, record in enumerate(self.reader, start=2):
            yield index, {key: record.get(name) or "" for key, name in self.columns.items()}

    @staticmethod
    def required(record: dict[str, str], header: str, row: int) -> str:
        value = record.get(header, "").strip()
        if not value:
            raise CsvImportError(f"{header} is required.", row)
        return value

    @classmethod
    def parse_date(cls, record: dict[str, str], header: str, row: int) -> date:
        value = cls.required(record, header, row)
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise CsvImportError(
                f"{header} must be in ISO format (yyyy-MM-dd).", row
            ) from None

    @classmethod
    def parse_decimal(
        cls, record: dict[str, str], header: str, row: int, allow_zero: bool = True
    ) -> Decimal:
        value = cls.required(record, header, row)
        try:
            parsed = Decimal(value)
        except InvalidOperation:
            raise CsvImportError(f"{header} must be a valid number.", row) from None
        if not parsed.is_finite():
            raise CsvImportError(f"{header} must be a valid number.", row)
        if allow_zero and parsed < 0:
            raise CsvImportError(f"{header} must be 0 or greater.", row)
        if not allow_zero and parsed <= 0:
            raise CsvImportError(f"{header} must be greater than 0.", row)
        return parsed

    @classmethod
    def parse_symbol(cls, record: dict[str, str], header: str, row: int) -> str:
        try:
            return normalize_symbol(cls.required(record, header, row))
        except InvalidInputError as e:
            raise CsvImportError(str(e), row) from None


def _dedup_key(tx: Transaction) -> tuple:
    return (tx.account.lower(), tx.date, tx.symbol, tx.side, tx.quantity, tx.price, tx.fee)


def import_transactions(
    source: Source, existing: Optional[TransactionLedger] = None
) -> tuple[TransactionLedger, CsvUploadResult]:
    """Import BUY/SELL rows from a CSV file into a new ledger.

    Args:
        source: Path or open text stream with the columns
            trade_date, account, symbol, type, quantity, price, fee.
        existing: Ledger to append to. Rows identical to a transaction already
            in it are skipped rather than imported twice.

    Returns:
        The combined ledger and a summary of what was imported.

    Raises:
        CsvImportError: If the headers are missing, any row is invalid, or the
            file holds no transactions. Nothing is imported in that case.
    """
    existing = existing or TransactionLedger()
    account_names = {tx.account.lower(): tx.account for tx in existing}
    parsed: list[Transaction] = []

    with _open(source) as handle:
        rows = _CsvRows(handle, TRANSACTION_HEADERS)
        for row, record in rows:
            account = rows.required(record, "account", row)
            account = account_names.setdefault(account.lower(), account)

            side = rows.required(record, "type", row).upper()
            if side not in SIDES:
                raise CsvImportError("type must be BUY or SELL.", row)

            parsed.append(
                Transaction(
                    date=rows.parse_date(record, "trade_date", row),
                    account=account,
                    symbol=rows.parse_symbol(record, "symbol", row),
                    side=side,  # type: ignore[arg-type]
                    quantity=rows.parse_decimal(record, "quantity", row, allow_zero=False),
                    price=rows.parse_decimal(record, "price", row),
                    fee=rows.parse_decimal(record, "fee", row),
                )
            )

    if not parsed:
        raise CsvImportError("CSV file does not contain any transactions.")

    seen = {_dedup_key(tx) for tx in existing}
    to_import = [tx for tx in parsed if _dedup_key(tx) not in seen]
    result = CsvUploadResult(
        imported_count=len(to_import),
        skipped_count=len(parsed) - len(to_import),
        accounts_affected=tuple(sorted({tx.account for tx in parsed})),
    )
    logger.info(
        "Imported %d transactions (%d duplicates skipped) for accounts %s",
        result.imported_count, result.skipped_count, ", ".join(result.accounts_affected),
    )
    return existing.appended(to_import), result


def load_transactions(source: Source) -> TransactionLedger:
    """Load a ledger from a CSV file."""
    ledger, _ = import_transactions(source)
    return ledger


def read_price_points(source: Source) -> list[PricePoint]:
    """Parse ``symbol, date, close_price`` rows."""
    points: list[PricePoint] = []
    with _open(source) as handle:
        rows = _CsvRows(handle, PRICE_HEADERS)
        for row, record in rows:
            points.append(
                PricePoint(
                    symbol=rows.parse_symbol(record, "symbol", row),
                    date=rows.parse_date(record, "date", row),
                    close_price=rows.parse_decimal(record, "close_price", row, allow_zero=False),
                )
            )
    return points


def load_prices(source: Source) -> PriceSeriesStore:
    """Load a price store from a CSV file of daily closes."""
    points = read_price_points(source)
    store = PriceSeriesStore(points)
    logger.info("Loaded %d close prices for %d symbols", len(points), len(store.symbols))
    return store
