"""
Trade Entries With Balance insight.

Closed trades together with balance operations, in time order. This is the
series an equity curve is drawn from.
"""

from typing import Any, Dict, List, Optional

from deal_insights.deals.models import Deal
from deal_insights.deals.store import DealStore
from deal_insights.insights.base import (
    ACCOUNT_NUMBER_PROPERTY,
    AccountParams,
    object_schema,
    parse_parameters,
    to_rows,
)
from deal_insights.insights.deals.filters import TRADE_ENTRIES_WITH_BALANCE


class TradeEntriesWithBalanceParams(AccountParams):
    """Parameters for the trade_entries_with_balance insight."""


PARAMETER_SCHEMA = object_schema("TradeEntriesWithBalanceParams", {
    "account_number": ACCOUNT_NUMBER_PROPERTY,
})


def execute_query(store: DealStore, params: TradeEntriesWithBalanceParams) -> List[Deal]:
    """Return deals where entry == 1 OR type == 2, sorted by time."""
    files = store.select_files(params.account_number)
    return store.read_deals(files, where=TRADE_ENTRIES_WITH_BALANCE, order_by="time")


class TradeEntriesWithBalanceInsight:

    def __init__(self, store: Optional[DealStore] = None):
        self._store = store

    @property
    def store(self) -> DealStore:
        return self._store or DealStore.from_settings()

    def identifier(self) -> str:
        return "deals.trade_entries_with_balance"

    def name(self) -> str:
        return "Trade Entries With Balance"

    def description(self) -> str:
        return "Returns all deal entries where entry == 1 OR type == 2"

    def parameter_schema(self) -> Dict[str, Any]:
        return PARAMETER_SCHEMA

    def validate_parameters(self, params: Any) -> None:
        parse_parameters(TradeEntriesWithBalanceParams, params)

    def execute(self, params: Any) -> List[Dict[str, Any]]:
        parsed = parse_parameters(TradeEntriesWithBalanceParams, params)
        return to_rows(execute_query(self.store, parsed))
