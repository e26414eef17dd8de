"""
Profit by Symbol insight.

Groups every deal by symbol and reports total profit, total volume, number
of deals and average profit per deal, most profitable symbol first.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import duckdb

from deal_insights.core.duckdb_manager import get_duckdb
from deal_insights.core.exceptions import ExecutionError
from deal_insights.deals.store import DealStore
from deal_insights.insights.base import (
    ACCOUNT_NUMBER_PROPERTY,
    AccountParams,
    object_schema,
    parse_parameters,
    to_rows,
)

logger = logging.getLogger(__name__)


class ProfitBySymbolParams(AccountParams):
    """Parameters for the profit_by_symbol insight."""

    min_profit: Optional[float] = None


PARAMETER_SCHEMA = object_schema("ProfitBySymbolParams", {
    "account_number": ACCOUNT_NUMBER_PROPERTY,
    "min_profit": {
        "type": ["number", "null"],
        "description": "Optional minimum profit threshold to filter results",
    },
})


@dataclass
class ProfitBySymbolResult:
    """Result row for profit_by_symbol."""
    symbol: str
    total_profit: float
    total_volume: float
    trade_count: int
    avg_profit: float


AGGREGATE_SQL = """
    SELECT
        symbol,
        SUM(profit) AS total_profit,
        SUM(volume) AS total_volume,
        COUNT(ticket) AS trade_count
    FROM deals
    GROUP BY symbol
    {having}
    ORDER BY total_profit DESC, symbol ASC
"""


def average(total: float, count: int) -> float:
    """total / count, or 0.0 when there is nothing to average."""
    return total / count if count > 0 else 0.0


def execute_query(store: DealStore, params: ProfitBySymbolParams) -> List[ProfitBySymbolResult]:
    files = store.select_files(params.account_number)
    if not files:
        return []

    df = store.scan(files)

    sql = AGGREGATE_SQL.format(
        having="HAVING SUM(profit) >= ?" if params.min_profit is not None else ""
    )
    sql_params = [params.min_profit] if params.min_profit is not None else []

    manager = get_duckdb()
    with manager.cursor() as cur:
        try:
            cur.register("deals", df)
            grouped = cur.execute(sql, sql_params).df()
        except duckdb.Error as e:
            raise ExecutionError(f"Failed to execute query: {e}") from e

    results = []
    for row in grouped.to_dict("records"):
        total_profit = float(row["total_profit"] or 0.0)
        trade_count = int(row["trade_count"] or 0)
        results.append(ProfitBySymbolResult(
            symbol=str(row["symbol"] or ""),
            total_profit=total_profit,
            total_volume=float(row["total_volume"] or 0.0),
            trade_count=trade_count,
            avg_profit=average(total_profit, trade_count),
        ))

    logger.debug(f"profit_by_symbol: {len(results)} symbol(s) from {len(files)} file(s)")
    return results


class ProfitBySymbolInsight:
    """Insight that calculates total profit grouped by symbol."""

    def __init__(self, store: Optional[DealStore] = None):
        self._store = store

    @property
    def store(self) -> DealStore:
        return self._store or DealStore.from_settings()

    def identifier(self) -> str:
        return "deals.profit_by_symbol"

    def name(self) -> str:
        return "Profit by Symbol"

    def description(self) -> str:
        return "Calculates total profit, volume, and trade count grouped by symbol from deal data"

    def parameter_schema(self) -> Dict[str, Any]:
        return PARAMETER_SCHEMA

    def validate_parameters(self, params: Any) -> None:
        parse_parameters(ProfitBySymbolParams, params)

    def execute(self, params: Any) -> List[Dict[str, Any]]:
        parsed = parse_parameters(ProfitBySymbolParams, params)
        return to_rows(execute_query(self.store, parsed))
