"""
Trade Entries insight - deals that close a position (entry == 1).
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
from deal_insights.insights.deals.filters import TRADE_ENTRIES


class TradeEntriesParams(AccountParams):
    """Parameters for the trade_entries insight."""


PARAMETER_SCHEMA = object_schema("TradeEntriesParams", {
    "account_number": ACCOUNT_NUMBER_PROPERTY,
})


def execute_query(store: DealStore, params: TradeEntriesParams) -> List[Deal]:
    files = store.select_files(params.account_number)
    return store.read_deals(files, where=TRADE_ENTRIES, order_by="time")


class TradeEntriesInsight:
    """Insight that returns trade entries."""

    def __init__(self, store: Optional[DealStore] = None):
        self._store = store

    @property
    def store(self) -> DealStore:
        return self._store or DealStore.from_settings()

    def identifier(self) -> str:
        return "deals.trade_entries"

    def name(self) -> str:
        return "Trade Entries"

    def description(self) -> str:
        return "Returns all deal entries where entry == 1 (trade entries)"

    def parameter_schema(self) -> Dict[str, Any]:
        return PARAMETER_SCHEMA

    def validate_parameters(self, params: Any) -> None:
        parse_parameters(TradeEntriesParams, params)

    def execute(self, params: Any) -> List[Dict[str, Any]]:
        parsed = parse_parameters(TradeEntriesParams, params)
        return to_rows(execute_query(self.store, parsed))
