from datetime import date
from decimal import Decimal

from conftest import closes, tx
from stockdash.ledger import TransactionLedger
from stockdash.performance import performance_series, select_accounts
from stockdash.prices import PriceSeriesStore
from stockdash.valuation import ValuationEngine


def _engine():
    ledger = TransactionLedger([
        tx("2025-01-02", "AAPL", quantity="10", price="100", account="Alpha"),
        tx("2025-01-03", "AAPL", quantity="5", price="101", account="Beta"),
        tx("2025-01-03", "MSFT", quantity="2", price="400", account="Beta"),
    ])
    prices = PriceSeriesStore(
        closes("AAPL", ("2025-01-02", "100"), ("2025-01-03", "102"), ("2025-01-06", "104"))
        + closes("MSFT", ("2025-01-03", "400"), ("2025-01-07", "410"))
        + closes("XYZ", ("2025-01-01", "9"))
    )
    return ValuationEngine(ledger, prices)


class TestSelectAccounts:
    def test_total_selects_all(self):
        assert select_accounts(["A", "B"], "TOTAL") == ["A", "B"]

    def test_case_insensitive_exact_match(self):
        assert select_accounts(["Alpha", "Alphabet"], "ALPHA") == ["Alpha"]

    def test_no_match(self):
        assert select_accounts(["Alpha"], "GAMMA") == []


class TestPerformanceSeries:
    def test_one_point_per_price_date(self):
        points = performance_series(_engine())
        assert [p.date for p in points] == [
            date(2025, 1, 1), date(2025, 1, 2), date(2025, 1, 3),
            date(2025, 1, 6), date(2025, 1, 7),
        ]

    def test_date_without_holdings_is_zero(self):
        first = performance_series(_engine())[0]
        assert first.date == date(2025, 1, 1)
        assert first.total_value == Decimal("0")
        assert first.stocks == ()

    def test_total_merges_symbols_across_accounts(self):
        points = {p.date: p for p in performance_series(_engine())}
        point = points[date(2025, 1, 6)]
        assert [(s.symbol, s.market_value) for s in point.stocks] == [
            ("AAPL", Decimal("1560.00")),  # 15 * 104
            ("MSFT", Decimal("800.00")),
        ]
        assert point.total_value == Decimal("2360.00")

    def test_single_account_filter(self):
        points = {p.date: p for p in performance_series(_engine(), "ALPHA")}
        point = points[date(2025, 1, 7)]
        assert [(s.symbol, s.market_value) for s in point.stocks] == [("AAPL", Decimal("1040.00"))]

    def test_account_without_transactions(self):
        points = performance_series(_engine(), "GAMMA")
        assert len(points) == 5
        assert all(p.total_value == 0 and p.stocks == () for p in points)

    def test_range_is_inclusive(self):
        points = performance_series(_engine(), start=date(2025, 1, 3), end=date(2025, 1, 6))
        assert [p.date for p in points] == [date(2025, 1, 3), date(2025, 1, 6)]

    def test_inverted_range_is_empty(self):
        assert performance_series(_engine(), start=date(2025, 1, 7), end=date(2025, 1, 1)) == []

    def test_no_prices_is_empty(self):
        engine = ValuationEngine(TransactionLedger([tx("2025-01-01", "AAPL")]), PriceSeriesStore())
        assert performance_series(engine) == []

    def test_total_value_is_sum_of_stock_values(self, demo_portfolio):
        for point in demo_portfolio.performance():
            assert point.total_value == sum(s.market_value for s in point.stocks)

    def test_demo_total_first_and_last(self, demo_portfolio):
        points = demo_portfolio.performance("TOTAL")
        assert len(points) == 10
        assert points[0].date == date(2025, 10, 3)
        assert points[0].total_value == Decimal("21095.45")
        assert points[-1].date == date(2026, 2, 20)
        assert points[-1].total_value == Decimal("78725.70")
