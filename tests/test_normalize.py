from datetime import date, datetime

import pytest

from stockdash.exceptions import InvalidInputError
from stockdash.normalize import (
    normalize_account_filter,
    normalize_symbol,
    parse_date,
    resolve_account,
)


class TestNormalizeSymbol:
    def test_trims_and_uppercases(self):
        assert normalize_symbol("  aapl ") == "AAPL"

    def test_alias_resolved_to_canonical(self):
        assert normalize_symbol("kla") == "KLAC"

    def test_blank_rejected(self):
        with pytest.raises(InvalidInputError, match="symbol") as exc:
            normalize_symbol("   ")
        assert exc.value.field == "symbol"

    def test_none_rejected(self):
        with pytest.raises(InvalidInputError):
            normalize_symbol(None)


class TestNormalizeAccountFilter:
    def test_blank_means_total(self):
        assert normalize_account_filter(None) == "TOTAL"
        assert normalize_account_filter("  ") == "TOTAL"

    def test_uppercased(self):
        assert normalize_account_filter(" demo_growth ") == "DEMO_GROWTH"
        assert normalize_account_filter("total") == "TOTAL"


class TestParseDate:
    def test_iso_string(self):
        assert parse_date(" 2025-02-01 ", "date") == date(2025, 2, 1)

    def test_date_passthrough(self):
        assert parse_date(date(2025, 2, 1), "date") == date(2025, 2, 1)

    def test_datetime_reduced_to_date(self):
        assert parse_date(datetime(2025, 2, 1, 15, 30), "date") == date(2025, 2, 1)

    def test_optional_missing(self):
        assert parse_date(None, "date") is None
        assert parse_date("", "date") is None

    def test_required_missing(self):
        with pytest.raises(InvalidInputError, match="date is required") as exc:
            parse_date(None, "endDate", required=True)
        assert exc.value.field == "endDate"

    def test_unparsable(self):
        with pytest.raises(InvalidInputError, match="startDate") as exc:
            parse_date("02/01/2025", "startDate")
        assert exc.value.field == "startDate"

    def test_unsupported_type(self):
        with pytest.raises(InvalidInputError, match="unsupported"):
            parse_date(20250201, "date")

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            parse_date("nope", "date")


class TestResolveAccount:
    def test_matches_ledger_spelling(self):
        assert resolve_account(["Main", "Roth IRA"], "  roth ira ") == "Roth IRA"

    def test_unknown_returned_trimmed(self):
        assert resolve_account(["Main"], " Other ") == "Other"
