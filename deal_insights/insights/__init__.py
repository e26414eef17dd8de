"""
Insights - named, parameterized, read-only queries over deal data.

This module provides:
- Insight: the capability every insight implements
- InsightRegistry: lookup by identifier, plus the one-time process registry
- ParameterValidator: JSON Schema validation of parameter payloads
- execute_insight / execute_batch_insights: single and concurrent execution
"""

from deal_insights.insights.base import Insight
from deal_insights.insights.batch import execute_batch_insights, execute_batch_insights_async
from deal_insights.insights.executor import execute_insight, extract_columns
from deal_insights.insights.factory import (
    build_registry,
    get_insight,
    get_registry,
    initialize_registry,
)
from deal_insights.insights.models import (
    BatchInsightItem,
    BatchInsightRequest,
    BatchInsightResponse,
    InsightDescriptor,
    InsightRequest,
    InsightResponse,
)
from deal_insights.insights.registry import InsightRegistry
from deal_insights.insights.validator import ParameterValidator

__all__ = [
    "Insight",
    "InsightRegistry",
    "ParameterValidator",
    "build_registry",
    "initialize_registry",
    "get_registry",
    "get_insight",
    "execute_insight",
    "extract_columns",
    "execute_batch_insights",
    "execute_batch_insights_async",
    "InsightRequest",
    "InsightResponse",
    "BatchInsightRequest",
    "BatchInsightItem",
    "BatchInsightResponse",
    "InsightDescriptor",
]
