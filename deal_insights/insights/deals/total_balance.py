"""
Total Balance insight - sum of profit over balance entries.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from deal_insights.deals.store import DealStore
from deal_insights.insights.base import (
    ACCOUNT_NUMBER_PROPERTY,
    AccountParams,
    object_schema,
    parse_parameters,
    to_rows,
)
from deal_insights.insights.deals.filters import BALANCE_ENTRIES


class TotalBalanceParams(AccountParams):
    """Parameters for the total_balance insight."""


PARAMETER_SCHEMA = object_schema("TotalBalanceParams", {
    "account_number": ACCOUNT_NUMBER_PROPERTY,
})


@dataclass
class TotalBalanceResult:
    """Total balance amount (sum of profit from balance entries)."""
    total_balance: float


def execute_query(store: DealStore, params: TotalBalanceParams) -> TotalBalanceResult:
    """
    Sum profit over deals where type == 2 AND entry == 0.

    Only the profit column is needed, but the filter still runs inside the
    scan so non-balance rows are never materialized. No matching rows gives
    a total of 0.0.
    """
    files = store.select_files(params.account_number)
    if not files:
        return TotalBalanceResult(total_balance=0.0)

    df = store.scan(files, where=BALANCE_ENTRIES)
    if df.empty:
        return TotalBalanceResult(total_balance=0.0)

    return TotalBalanceResult(total_balance=float(df["profit"].sum()))


class TotalBalanceInsight:
    """Insight that totals the account's balance operations."""

    def __init__(self, store: Optional[DealStore] = None):
        self._store = store

    @property
    def store(self) -> DealStore:
        return self._store or DealStore.from_settings()

    def identifier(self) -> str:
        return "deals.total_balance"

    def name(self) -> str:
        return "Total Balance"

    def description(self) -> str:
        return "Returns the sum of profit from balance entries (type == 2 AND entry == 0)"

    def parameter_schema(self) -> Dict[str, Any]:
        return PARAMETER_SCHEMA

    def validate_parameters(self, params: Any) -> None:
        parse_parameters(TotalBalanceParams, params)

    def execute(self, params: Any) -> List[Dict[str, Any]]:
        parsed = parse_parameters(TotalBalanceParams, params)
        return to_rows([execute_query(self.store, parsed)])
