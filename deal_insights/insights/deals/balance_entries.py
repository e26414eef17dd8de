"""
Balance Entries insight - deposits, withdrawals and other balance operations.
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
from deal_insights.insights.deals.filters import BALANCE_ENTRIES


class BalanceEntriesParams(AccountParams):
    """Parameters for the balance_entries insight."""


PARAMETER_SCHEMA = object_schema("BalanceEntriesParams", {
    "account_number": ACCOUNT_NUMBER_PROPERTY,
})


def execute_query(store: DealStore, params: BalanceEntriesParams) -> List[Deal]:
    """Return deals where type == 2 AND entry == 0, sorted by time."""
    files = store.select_files(params.account_number)
    return store.read_deals(files, where=BALANCE_ENTRIES, order_by="time")


class BalanceEntriesInsight:
    """Insight that returns balance entries (type == 2 AND entry == 0)."""

    def __init__(self, store: Optional[DealStore] = None):
        self._store = store

    @property
    def store(self) -> DealStore:
        return self._store or DealStore.from_settings()

    def identifier(self) -> str:
        return "deals.balance_entries"

    def name(self) -> str:
        return "Balance Entries"

    def description(self) -> str:
        return "Returns all deal entries where type == 2 AND entry == 0"

    def parameter_schema(self) -> Dict[str, Any]:
        return PARAMETER_SCHEMA

    def validate_parameters(self, params: Any) -> None:
        parse_parameters(BalanceEntriesParams, params)

    def execute(self, params: Any) -> List[Dict[str, Any]]:
        parsed = parse_parameters(BalanceEntriesParams, params)
        return to_rows(execute_query(self.store, parsed))
