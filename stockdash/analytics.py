"""Return and CAGR between two valuation points."""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from .config import DEFAULT_CONFIG
from .models import ZERO, Number, PerformancePoint, ReturnSummary, to_decimal


def days_between(start: date, end: date) -> int:
    """Elapsed calendar days, never negative."""
    return max(0, (end - start).days)


def compute_return(start_value: Number, end_value: Number) -> Optional[Decimal]:
    """Simple return; None when the start value is not positive."""
    start_value, end_value = to_decimal(start_value), to_decimal(end_value)
    if start_value <= 0:
        return None
    return (end_value - start_value) / start_value


def compute_cagr(
    start_value: Number, end_value: Number, start: date, end: date
) -> Optional[Decimal]:
    """Compound annual growth rate over ``start``..``end``.

    Years are measured against the mean Gregorian year (365.2425 days). Only
    defined when both values and the elapsed time are positive; sign changes
    yield None rather than a complex root.
    """
    start_value, end_value = to_decimal(start_value), to_decimal(end_value)
    years = Decimal(days_between(start, end)) / DEFAULT_CONFIG.DAYS_PER_YEAR
    if start_value <= 0 or end_value <= 0 or years <= 0:
        return None
    return (end_value / start_value) ** (Decimal(1) / years) - 1


def summarize(points: Sequence[PerformancePoint]) -> ReturnSummary:
    """Net gain/loss, return and CAGR between the first and last point."""
    if not points:
        return ReturnSummary(
            start_date=None,
            end_date=None,
            start_value=ZERO,
            end_value=ZERO,
            net_gain_loss=ZERO,
            total_return=None,
            cagr=None,
        )

    first, last = points[0], points[-1]
    enough = len(points) > 1
    return ReturnSummary(
        start_date=first.date,
        end_date=last.date,
        start_value=first.total_value,
        end_value=last.total_value,
        net_gain_loss=last.total_value - first.total_value,
        total_return=compute_return(first.total_value, last.total_value) if enough else None,
        cagr=(
            compute_cagr(first.total_value, last.total_value, first.date, last.date)
            if enough
            else None
        ),
    )
