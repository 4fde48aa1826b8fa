"""Read-only store of per-symbol daily close series."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Iterator, Optional

import numpy as np

from .models import PricePoint


def _day(value: date) -> np.datetime64:
    return np.datetime64(value, "D")


class _Series:
    """Dates as a sorted ``datetime64[D]`` array with closes aligned by index."""

    __slots__ = ("dates", "closes")

    def __init__(self, points: list[PricePoint]) -> None:
        raw = np.array([p.date for p in points], dtype="datetime64[D]")
        order = np.argsort(raw, kind="stable")
        self.dates = raw[order]
        self.closes: tuple[Decimal, ...] = tuple(points[i].close_price for i in order)


class PriceSeriesStore:
    """Immutable view over symbol -> ascending daily closes.

    Symbols are expected to be normalized already (see ``normalize_symbol``).
    """

    def __init__(self, points: Iterable[PricePoint] = ()) -> None:
        grouped: dict[str, list[PricePoint]] = defaultdict(list)
        for point in points:
            grouped[point.symbol].append(point)
        self._series = {symbol: _Series(pts) for symbol, pts in grouped.items()}

        if self._series:
            all_dates = np.unique(np.concatenate([s.dates for s in self._series.values()]))
        else:
            all_dates = np.array([], dtype="datetime64[D]")
        self._available_dates: tuple[date, ...] = tuple(all_dates.astype(object))

    @property
    def symbols(self) -> list[str]:
        return sorted(self._series)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._series

    def __len__(self) -> int:
        return sum(len(s.dates) for s in self._series.values())

    def points(self, symbol: str) -> list[PricePoint]:
        """All points for ``symbol`` in ascending date order."""
        series = self._series.get(symbol)
        if series is None:
            return []
        return [
            PricePoint(symbol=symbol, date=d, close_price=close)
            for d, close in zip(series.dates.astype(object), series.closes)
        ]

    def __iter__(self) -> Iterator[PricePoint]:
        for symbol in self.symbols:
            yield from self.points(symbol)

    def as_of_close(self, symbol: str, day: date) -> Optional[Decimal]:
        """Latest close dated on or before ``day``; never the next one, never interpolated."""
        series = self._series.get(symbol)
        if series is None or len(series.dates) == 0:
            return None
        idx = int(np.searchsorted(series.dates, _day(day), side="right")) - 1
        if idx < 0:
            return None
        return series.closes[idx]

    def latest_date(self, symbol: str) -> Optional[date]:
        series = self._series.get(symbol)
        if series is None or len(series.dates) == 0:
            return None
        return series.dates[-1].item()

    def available_dates(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> list[date]:
        """Distinct dates across every series, ascending, filtered to ``[start, end]``."""
        return [
            d
            for d in self._available_dates
            if (start is None or d >= start) and (end is None or d <= end)
        ]

    @property
    def first_date(self) -> Optional[date]:
        return self._available_dates[0] if self._available_dates else None

    @property
    def last_date(self) -> Optional[date]:
        return self._available_dates[-1] if self._available_dates else None

    def history(
        self, symbol: str, start: Optional[date] = None, end: Optional[date] = None
    ) -> list[PricePoint]:
        """Points within ``[start, end]`` newest first, as returned to API callers."""
        return [
            p
            for p in reversed(self.points(symbol))
            if (start is None or p.date >= start) and (end is None or p.date <= end)
        ]

    def merged(self, points: Iterable[PricePoint]) -> "PriceSeriesStore":
        """Return a new store holding these points plus ``points``."""
        return PriceSeriesStore([*self, *points])

    def __repr__(self) -> str:
        return f"PriceSeriesStore(symbols={self.symbols}, points={len(self)})"
