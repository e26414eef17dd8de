"""
Single-insight execution.

Looks up an insight, runs both validation stages, executes it and wraps the
outcome in an InsightResponse. Validation and query failures come back as
failure envelopes; only an unknown identifier is raised.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from deal_insights.core.exceptions import InsightError, NotFoundError
from deal_insights.insights.factory import get_registry
from deal_insights.insights.models import InsightRequest, InsightResponse
from deal_insights.insights.registry import InsightRegistry
from deal_insights.insights.validator import ParameterValidator

logger = logging.getLogger(__name__)


def extract_columns(data: Any) -> List[str]:
    """
    Column names for table rendering: the keys of the first row.

    Rows are assumed to share one shape; anything that is not a list of
    mappings has no columns.
    """
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return list(data[0].keys())
    return []


def execute_insight(
    request: InsightRequest,
    registry: Optional[InsightRegistry] = None,
) -> InsightResponse:
    """
    Execute one insight.

    Args:
        request: Insight identifier and raw parameters
        registry: Registry to look the insight up in; defaults to the
                  process-wide registry

    Returns:
        InsightResponse - success with rows and columns, or a failure envelope

    Raises:
        NotFoundError: if no insight has the requested identifier
    """
    if registry is None:
        registry = get_registry()

    insight = registry.get(request.insight_id)
    if insight is None:
        raise NotFoundError(
            "Insight",
            request.insight_id,
            message=f"Insight '{request.insight_id}' not found",
        )

    try:
        ParameterValidator.validate(insight.parameter_schema(), request.parameters)
        insight.validate_parameters(request.parameters)
    except InsightError as e:
        logger.info(f"Rejected parameters for {request.insight_id}: {e.message}")
        return InsightResponse.failed(f"Parameter validation failed: {e.message}")

    start = time.time()
    try:
        data: List[Dict[str, Any]] = insight.execute(request.parameters)
    except InsightError as e:
        logger.warning(f"Insight {request.insight_id} failed: {e.message}")
        return InsightResponse.failed(e.message)

    elapsed_ms = (time.time() - start) * 1000
    logger.info(f"Insight {request.insight_id}: {len(data)} rows ({elapsed_ms:.1f}ms)")

    return InsightResponse.ok(data, extract_columns(data))
