"""
Shared dependencies for FastAPI routes.
"""

from deal_insights.deals.store import DealStore
from deal_insights.insights.factory import get_registry
from deal_insights.insights.registry import InsightRegistry


def get_deal_store() -> DealStore:
    """Deal store for the configured deals directory."""
    return DealStore.from_settings()


def get_insight_registry() -> InsightRegistry:
    """The process-wide registry (initialized in the app lifespan)."""
    return get_registry()
