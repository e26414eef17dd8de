"""
Insight Registry - holds the insights available for execution.
"""

import logging
from typing import Dict, List, Optional

from deal_insights.insights.base import Insight
from deal_insights.insights.models import InsightDescriptor

logger = logging.getLogger(__name__)


class InsightRegistry:
    """
    Registry of insights keyed by identifier.

    The process-wide instance is built once by
    ``deal_insights.insights.factory.initialize_registry`` and is only read
    afterwards. Separate instances can be built for tests or embedding.

    Usage:
        registry = InsightRegistry()
        registry.register(TotalBalanceInsight(store))

        insight = registry.get("deals.total_balance")
        rows = insight.execute({})
    """

    def __init__(self):
        self._insights: Dict[str, Insight] = {}

    def register(self, insight: Insight) -> None:
        """Register an insight under its identifier."""
        if not isinstance(insight, Insight):
            raise TypeError(f"{type(insight).__name__} does not implement the Insight protocol")

        identifier = insight.identifier()
        if identifier in self._insights:
            logger.warning(f"Duplicate insight identifier '{identifier}' - overwriting")

        self._insights[identifier] = insight
        logger.debug(f"Registered insight: {identifier}")

    def get(self, identifier: str) -> Optional[Insight]:
        """
        Get an insight by identifier.

        Returns:
            The insight if registered, None otherwise.
        """
        return self._insights.get(identifier)

    def exists(self, identifier: str) -> bool:
        return identifier in self._insights

    def list_identifiers(self) -> List[str]:
        """Get identifiers of all registered insights."""
        return list(self._insights.keys())

    def describe(self) -> List[InsightDescriptor]:
        """
        Describe every registered insight without executing any of them.

        Callers use the parameter schemas to build parameter forms.
        """
        return [
            InsightDescriptor(
                insight_id=identifier,
                name=insight.name(),
                description=insight.description(),
                parameter_schema=insight.parameter_schema(),
            )
            for identifier, insight in sorted(self._insights.items())
        ]

    def __len__(self) -> int:
        return len(self._insights)

    def summary(self) -> str:
        """Get a summary of registered insights."""
        lines = [f"Insight Registry: {len(self._insights)} insights"]
        for identifier, insight in sorted(self._insights.items()):
            lines.append(f"  - {identifier}: {insight.description()}")
        return "\n".join(lines)
