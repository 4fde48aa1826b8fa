from datetime import date
from decimal import Decimal
from io import StringIO
from unittest.mock import MagicMock

import pytest

from conftest import closes, tx
from stockdash.exceptions import InvalidInputError
from stockdash.ledger import TransactionLedger
from stockdash.portfolio import Portfolio
from stockdash.prices import PriceSeriesStore
from stockdash.sync import SeriesFetchResult, SeriesFetchStatus, SyncStatus


class TestPortfolioReads:
    def test_daily_summary_from_string_date(self, demo_portfolio):
        snapshots = demo_portfolio.daily_summary("2026-02-20")
        assert [s.account_name for s in snapshots] == ["DEMO_GROWTH", "DEMO_INCOME"]
        assert snapshots[0].total_value == Decimal("50910.30")
        assert snapshots[1].total_value == Decimal("27815.40")

    def test_daily_summary_defaults_to_latest_price_date(self, demo_portfolio):
        snapshots = demo_portfolio.daily_summary()
        assert {s.as_of_date for s in snapshots} == {date(2026, 2, 20)}

    def test_invalid_date(self, demo_portfolio):
        with pytest.raises(InvalidInputError) as exc:
            demo_portfolio.daily_summary("20-02-2026")
        assert exc.value.field == "date"

    def test_account_snapshot_requires_date(self, demo_portfolio):
        with pytest.raises(InvalidInputError, match="date is required"):
            demo_portfolio.account_snapshot("DEMO_GROWTH", None)

    def test_account_snapshot_matches_name_case_insensitively(self):
        portfolio = Portfolio(TransactionLedger([
            tx("2025-01-01", "AAPL", quantity="10", price="150", account="Main"),
        ]))
        snapshot = portfolio.account_snapshot(" main ", "2025-01-01")
        assert snapshot.account_name == "Main"
        assert snapshot.total_value == Decimal("1500.00")
        assert portfolio.account_snapshot("MAIN", "2025-01-01") == snapshot

    def test_account_snapshot_unknown_account_is_empty(self, aapl_ledger, aapl_prices):
        snapshot = Portfolio(aapl_ledger, aapl_prices).account_snapshot(" other ", "2025-02-01")
        assert snapshot.account_name == "other"
        assert snapshot.positions == ()

    def test_performance_account_case_insensitive(self, demo_portfolio):
        lower = demo_portfolio.performance("demo_income")
        upper = demo_portfolio.performance("DEMO_INCOME")
        assert lower == upper
        assert lower[-1].total_value == Decimal("27815.40")

    def test_performance_bad_end_date(self, demo_portfolio):
        with pytest.raises(InvalidInputError) as exc:
            demo_portfolio.performance(end_date="soon")
        assert exc.value.field == "endDate"

    def test_returns_over_window(self, demo_portfolio):
        summary = demo_portfolio.returns("TOTAL")
        assert summary.start_date == date(2025, 10, 3)
        assert summary.end_date == date(2026, 2, 20)
        assert summary.end_value == Decimal("78725.70")
        assert summary.net_gain_loss == summary.end_value - summary.start_value

    def test_history_normalized_and_descending(self, demo_portfolio):
        points = demo_portfolio.history(" aapl ", "2026-01-01")
        assert [p.date for p in points] == [
            date(2026, 2, 20), date(2026, 2, 12), date(2026, 1, 17),
        ]
        assert points[0].close_price == Decimal("203.40")

    def test_history_blank_symbol(self, demo_portfolio):
        with pytest.raises(InvalidInputError):
            demo_portfolio.history("")

    def test_symbols_only_purchased(self):
        portfolio = Portfolio(TransactionLedger([
            tx("2025-01-02", "MSFT"),
            tx("2025-01-02", "AAPL"),
            tx("2025-01-03", "TSLA", side="SELL"),
        ]))
        assert portfolio.symbols() == ["AAPL", "MSFT"]

    def test_empty_portfolio(self):
        portfolio = Portfolio()
        assert portfolio.daily_summary() == []
        assert portfolio.performance() == []
        assert portfolio.symbols() == []


class TestPortfolioWrites:
    CSV = (
        "trade_date,account,symbol,type,quantity,price,fee\n"
        "2025-01-01,Main,AAPL,BUY,10,150,1\n"
    )

    def test_import_transactions(self):
        portfolio = Portfolio()
        result = portfolio.import_transactions(StringIO(self.CSV))
        assert result.imported_count == 1
        again = portfolio.import_transactions(StringIO(self.CSV))
        assert again.skipped_count == 1
        assert len(portfolio.ledger) == 1

    def test_from_csv(self, tmp_path):
        transactions = tmp_path / "transactions.csv"
        transactions.write_text(self.CSV, encoding="utf-8")
        prices = tmp_path / "prices.csv"
        prices.write_text("symbol,date,close_price\nAAPL,2025-02-01,165\n", encoding="utf-8")

        portfolio = Portfolio.from_csv(transactions, prices)
        (snapshot,) = portfolio.daily_summary()
        assert snapshot.as_of_date == date(2025, 2, 1)
        assert snapshot.total_value == Decimal("1649.00")

    def test_sync_prices_replaces_store(self, aapl_ledger, aapl_prices):
        portfolio = Portfolio(aapl_ledger, aapl_prices)
        fetch = MagicMock(return_value=SeriesFetchResult(
            SeriesFetchStatus.SUCCESS, {date(2025, 2, 3): Decimal("170")}
        ))
        result = portfolio.sync_prices(["aapl"], fetch, today=date(2025, 2, 10))

        assert result.status_by_symbol == {"AAPL": SyncStatus.STORED}
        assert portfolio.prices is not aapl_prices
        assert portfolio.prices.latest_date("AAPL") == date(2025, 2, 3)
        (snapshot,) = portfolio.daily_summary()
        assert snapshot.total_value == Decimal("1699.00")

    def test_repr(self, aapl_ledger, aapl_prices):
        text = repr(Portfolio(aapl_ledger, aapl_prices))
        assert "MAIN" in text
        assert "AAPL" in text
