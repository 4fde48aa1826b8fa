"""Normalization applied once at the boundary, before any ledger or price lookup."""

from datetime import date, datetime
from typing import Iterable, Optional, Union

from .config import DEFAULT_CONFIG
from .exceptions import InvalidInputError

DateLike = Union[date, str, None]


def normalize_symbol(raw: Optional[str], field: str = "symbol") -> str:
    """Trim, upper-case and resolve known aliases (e.g. KLA -> KLAC)."""
    upper = (raw or "").strip().upper()
    if not upper:
        raise InvalidInputError(field, "symbol is required")
    return DEFAULT_CONFIG.SYMBOL_ALIASES.get(upper, upper)


def normalize_account_filter(raw: Optional[str]) -> str:
    """Return the upper-cased account filter; blank means all accounts."""
    value = (raw or "").strip().upper()
    return value or DEFAULT_CONFIG.TOTAL_ACCOUNT


def parse_date(value: DateLike, field: str, required: bool = False) -> Optional[date]:
    """Parse an ISO calendar date, failing fast with the offending field name."""
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise InvalidInputError(field, "date is required")
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise InvalidInputError(
                field, f"'{value}' must be in ISO format (yyyy-MM-dd)"
            ) from None
    raise InvalidInputError(field, f"unsupported date value {value!r}")


def resolve_account(accounts: Iterable[str], raw: Optional[str]) -> str:
    """Map a requested account name onto the ledger's spelling.

    Matching is trimmed and case-insensitive. Unknown names come back trimmed,
    so they still value to an empty snapshot.
    """
    wanted = (raw or "").strip()
    return next((a for a in accounts if a.upper() == wanted.upper()), wanted)
