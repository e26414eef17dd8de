"""
All Entries insight - every deal entry, no filter.
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


class AllEntriesParams(AccountParams):
    """Parameters for the all_entries insight."""


PARAMETER_SCHEMA = object_schema("AllEntriesParams", {
    "account_number": ACCOUNT_NUMBER_PROPERTY,
})


def execute_query(store: DealStore, params: AllEntriesParams) -> List[Deal]:
    """Return every deal, sorted by time."""
    files = store.select_files(params.account_number)
    return store.read_deals(files, order_by="time")


class AllEntriesInsight:
    """Insight that returns all deal entries."""

    def __init__(self, store: Optional[DealStore] = None):
        self._store = store

    @property
    def store(self) -> DealStore:
        return self._store or DealStore.from_settings()

    def identifier(self) -> str:
        return "deals.all_entries"

    def name(self) -> str:
        return "All Deal Entries"

    def description(self) -> str:
        return "Returns all deal entries with no filter"

    def parameter_schema(self) -> Dict[str, Any]:
        return PARAMETER_SCHEMA

    def validate_parameters(self, params: Any) -> None:
        parse_parameters(AllEntriesParams, params)

    def execute(self, params: Any) -> List[Dict[str, Any]]:
        parsed = parse_parameters(AllEntriesParams, params)
        return to_rows(execute_query(self.store, parsed))
