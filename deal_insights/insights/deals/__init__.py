"""
Deal insights.

Built-in queries over the deals directory:
- all_entries: every deal
- balance_entries: balance operations (type == 2 AND entry == 0)
- trade_entries: closed trades (entry == 1)
- trade_entries_with_balance: closed trades and balance operations
- total_balance: sum of profit over balance operations
- profit_by_symbol: profit, volume and count grouped by symbol
"""

from deal_insights.insights.deals.all_entries import AllEntriesInsight
from deal_insights.insights.deals.balance_entries import BalanceEntriesInsight
from deal_insights.insights.deals.profit_by_symbol import ProfitBySymbolInsight
from deal_insights.insights.deals.total_balance import TotalBalanceInsight
from deal_insights.insights.deals.trade_entries import TradeEntriesInsight
from deal_insights.insights.deals.trade_entries_with_balance import TradeEntriesWithBalanceInsight

BUILTIN_INSIGHTS = (
    ProfitBySymbolInsight,
    TradeEntriesInsight,
    AllEntriesInsight,
    TradeEntriesWithBalanceInsight,
    BalanceEntriesInsight,
    TotalBalanceInsight,
)

__all__ = [
    "AllEntriesInsight",
    "BalanceEntriesInsight",
    "ProfitBySymbolInsight",
    "TotalBalanceInsight",
    "TradeEntriesInsight",
    "TradeEntriesWithBalanceInsight",
    "BUILTIN_INSIGHTS",
]
