"""
Process-wide insight registry.

The registry is built exactly once, at application start-up, and is
read-only afterwards. Looking it up before initialize_registry() has run is a
programming error and raises RegistryNotInitializedError; nothing in the
engine catches it.
"""

import logging
from threading import Lock
from typing import Optional

from deal_insights.core.exceptions import RegistryNotInitializedError
from deal_insights.deals.store import DealStore
from deal_insights.insights.base import Insight
from deal_insights.insights.deals import BUILTIN_INSIGHTS
from deal_insights.insights.registry import InsightRegistry

logger = logging.getLogger(__name__)

_registry: Optional[InsightRegistry] = None
_lock = Lock()


def build_registry(store: Optional[DealStore] = None) -> InsightRegistry:
    """
    Build a registry holding every built-in insight.

    Args:
        store: Deal store the insights read from. None means the configured
               deals directory, resolved at execution time.
    """
    registry = InsightRegistry()
    for insight_class in BUILTIN_INSIGHTS:
        registry.register(insight_class(store))
    return registry


def initialize_registry(store: Optional[DealStore] = None) -> InsightRegistry:
    """
    Initialize the process-wide registry.

    Idempotent: the first caller builds the registry, every later or
    concurrent caller gets the same instance (and its store argument is
    ignored).
    """
    global _registry

    if _registry is None:
        with _lock:
            if _registry is None:
                _registry = build_registry(store)
                logger.info(f"Insight registry initialized with {len(_registry)} insights")
    return _registry


def get_registry() -> InsightRegistry:
    """
    Get the process-wide registry.

    Raises:
        RegistryNotInitializedError: if initialize_registry() has not run
    """
    if _registry is None:
        raise RegistryNotInitializedError(
            "Insight registry not initialized. Call initialize_registry() first."
        )
    return _registry


def get_insight(identifier: str) -> Optional[Insight]:
    """Get an insight from the process-wide registry."""
    return get_registry().get(identifier)
