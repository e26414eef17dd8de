"""
Insights API routes.
"""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from deal_insights.core.exceptions import NotFoundError
from deal_insights.insights.batch import execute_batch_insights_async
from deal_insights.insights.executor import execute_insight
from deal_insights.insights.models import (
    BatchInsightRequest,
    BatchInsightResponse,
    InsightDescriptor,
    InsightRequest,
    InsightResponse,
)
from deal_insights.insights.registry import InsightRegistry
from deal_insights.api.dependencies import get_insight_registry

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("", response_model=List[InsightDescriptor])
async def list_insights(registry: InsightRegistry = Depends(get_insight_registry)):
    """
    List every registered insight with its parameter schema.

    Nothing is executed; the schemas are meant for building parameter forms.
    """
    return registry.describe()


@router.get("/{insight_id}/schema")
async def get_parameter_schema(
    insight_id: str,
    registry: InsightRegistry = Depends(get_insight_registry),
):
    """Get the JSON Schema of one insight's parameters."""
    insight = registry.get(insight_id)
    if insight is None:
        raise NotFoundError("Insight", insight_id, message=f"Insight '{insight_id}' not found")
    return insight.parameter_schema()


@router.post("/execute", response_model=InsightResponse)
async def run_insight(
    request: InsightRequest,
    registry: InsightRegistry = Depends(get_insight_registry),
):
    """
    Execute one insight.

    Validation and query failures are returned as a normal response with
    success=false; an unknown insight is a 404.
    """
    return await run_in_threadpool(execute_insight, request, registry)


@router.post("/batch", response_model=BatchInsightResponse)
async def run_batch(
    request: BatchInsightRequest,
    registry: InsightRegistry = Depends(get_insight_registry),
):
    """
    Execute several insights concurrently.

    Results come back in request order; each item succeeds or fails on its own.
    """
    return await execute_batch_insights_async(request, registry=registry)
