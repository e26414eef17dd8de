"""
Deal Insights - insight execution engine for trading deal records.

Usage:
    from deal_insights.insights import (
        InsightRequest, execute_insight, initialize_registry,
    )

    initialize_registry()
    response = execute_insight(InsightRequest(insight_id="deals.total_balance"))
"""

__version__ = "0.1.0"
