"""
Unit tests for the built-in deal insights.
"""

import pytest

from deal_insights.core.exceptions import NotFoundError, ValidationError
from deal_insights.deals.store import DealStore
from deal_insights.insights.deals import (
    AllEntriesInsight,
    BalanceEntriesInsight,
    ProfitBySymbolInsight,
    TotalBalanceInsight,
    TradeEntriesInsight,
    TradeEntriesWithBalanceInsight,
)
from deal_insights.insights.deals.profit_by_symbol import average

from conftest import make_deal


def tickets(rows):
    return [row["ticket"] for row in rows]


class TestEntryInsights:
    """Test the filtered entry listings."""

    def test_all_entries(self, store):
        rows = AllEntriesInsight(store).execute({})
        assert tickets(rows) == [5, 1, 2, 4, 3, 6]

    def test_all_entries_single_account(self, store):
        rows = AllEntriesInsight(store).execute({"account_number": "1001"})
        assert tickets(rows) == [1, 2, 4, 3]

    def test_balance_entries(self, store):
        """Only type == 2 AND entry == 0."""
        rows = BalanceEntriesInsight(store).execute({})
        assert tickets(rows) == [5, 1]
        assert all(r["type"] == 2 and r["entry"] == 0 for r in rows)

    def test_trade_entries(self, store):
        """Only entry == 1."""
        rows = TradeEntriesInsight(store).execute({})
        assert tickets(rows) == [4, 3, 6]
        assert all(r["entry"] == 1 for r in rows)

    def test_trade_entries_with_balance_is_union(self, store):
        """The combined listing is exactly trades plus balance operations."""
        combined = TradeEntriesWithBalanceInsight(store).execute({})
        trades = TradeEntriesInsight(store).execute({})
        balance = BalanceEntriesInsight(store).execute({})

        assert not set(tickets(trades)) & set(tickets(balance))
        assert set(tickets(combined)) == set(tickets(trades)) | set(tickets(balance))
        assert tickets(combined) == [5, 1, 4, 3, 6]

    def test_rows_have_every_deal_field(self, store):
        rows = TradeEntriesInsight(store).execute({"account_number": "1002"})
        assert rows == [{
            "ticket": 6, "order": 6, "time": 400, "time_msc": 400000,
            "type": 1, "entry": 1, "magic": 0, "position_id": 0, "reason": 0,
            "volume": 2.0, "price": 1.11, "commission": 0.0, "swap": 0.0,
            "profit": 30.0, "fee": 0.0, "symbol": "EURUSD", "comment": "",
            "external_id": "",
        }]

    def test_equal_times_keep_file_order(self, tmp_path):
        """Sorting by time is stable across files."""
        DealStore.write_deals(tmp_path / "a.parquet", [make_deal(10, time=5, entry=1)])
        DealStore.write_deals(tmp_path / "b.parquet", [make_deal(11, time=5, entry=1)])

        rows = TradeEntriesInsight(DealStore(tmp_path)).execute({})
        assert tickets(rows) == [10, 11]

    def test_unknown_account_is_not_found(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            AllEntriesInsight(store).execute({"account_number": "9999"})
        assert exc_info.value.message.startswith("Deal file not found:")

    def test_empty_directory_is_empty_result(self, empty_deals_dir):
        assert TradeEntriesInsight(DealStore(empty_deals_dir)).execute({}) == []


class TestTotalBalance:
    """Test the balance sum."""

    def test_total_over_all_accounts(self, store):
        assert TotalBalanceInsight(store).execute({}) == [{"total_balance": 1500.0}]

    def test_total_single_account(self, store):
        rows = TotalBalanceInsight(store).execute({"account_number": "1002"})
        assert rows == [{"total_balance": 500.0}]

    def test_trades_do_not_count(self, store):
        """Trade profits are excluded from the balance."""
        trade_profit = sum(r["profit"] for r in TradeEntriesInsight(store).execute({}))
        assert trade_profit == 60.0
        assert TotalBalanceInsight(store).execute({})[0]["total_balance"] == 1500.0

    def test_empty_directory(self, empty_deals_dir):
        rows = TotalBalanceInsight(DealStore(empty_deals_dir)).execute({})
        assert rows == [{"total_balance": 0.0}]

    def test_no_balance_rows(self, tmp_path):
        DealStore.write_deals(tmp_path / "x.parquet", [make_deal(1, entry=1, profit=5.0)])
        rows = TotalBalanceInsight(DealStore(tmp_path)).execute({})
        assert rows == [{"total_balance": 0.0}]


class TestProfitBySymbol:
    """Test the per-symbol aggregation."""

    def test_grouping_and_order(self, store):
        rows = ProfitBySymbolInsight(store).execute({})

        assert [r["symbol"] for r in rows] == ["", "EURUSD", "GBPUSD"]
        eurusd = rows[1]
        assert eurusd["total_profit"] == pytest.approx(80.0)
        assert eurusd["total_volume"] == pytest.approx(4.0)
        assert eurusd["trade_count"] == 3
        assert eurusd["avg_profit"] == pytest.approx(80.0 / 3)

    def test_sorted_by_total_profit_descending(self, store):
        totals = [r["total_profit"] for r in ProfitBySymbolInsight(store).execute({})]
        assert totals == sorted(totals, reverse=True)

    def test_ties_broken_by_symbol(self, tmp_path):
        DealStore.write_deals(tmp_path / "t.parquet", [
            make_deal(1, symbol="ZAR", profit=10.0),
            make_deal(2, symbol="AUD", profit=10.0),
        ])
        rows = ProfitBySymbolInsight(DealStore(tmp_path)).execute({})
        assert [r["symbol"] for r in rows] == ["AUD", "ZAR"]

    def test_min_profit_filters_groups(self, store):
        """min_profit applies to the group total, inclusive."""
        rows = ProfitBySymbolInsight(store).execute({"min_profit": 80})
        assert [r["symbol"] for r in rows] == ["", "EURUSD"]

        rows = ProfitBySymbolInsight(store).execute({"min_profit": 80.01})
        assert [r["symbol"] for r in rows] == [""]

    def test_single_account(self, store):
        rows = ProfitBySymbolInsight(store).execute({"account_number": "1002"})
        assert {r["symbol"]: r["trade_count"] for r in rows} == {"": 1, "EURUSD": 1}

    def test_empty_directory(self, empty_deals_dir):
        assert ProfitBySymbolInsight(DealStore(empty_deals_dir)).execute({}) == []

    def test_average_of_nothing(self):
        assert average(0.0, 0) == 0.0
        assert average(9.0, 3) == 3.0


class TestParameters:
    """Test insight-specific parameter validation."""

    @pytest.mark.parametrize("account", ["", "  ", "..", "../1001", "a/b", "a\\b"])
    def test_account_number_must_be_file_name(self, store, account):
        with pytest.raises(ValidationError) as exc_info:
            AllEntriesInsight(store).validate_parameters({"account_number": account})
        assert exc_info.value.message.startswith("Invalid parameters: account_number")

    def test_extra_parameters_ignored(self, store):
        TotalBalanceInsight(store).validate_parameters({"account_number": "1001", "x": 1})

    def test_null_parameters_allowed(self, store):
        ProfitBySymbolInsight(store).validate_parameters(
            {"account_number": None, "min_profit": None}
        )

    def test_wrong_type_rejected(self, store):
        with pytest.raises(ValidationError):
            ProfitBySymbolInsight(store).validate_parameters({"min_profit": "lots"})
