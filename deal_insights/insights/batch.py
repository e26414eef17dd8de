"""
Batch insight execution with concurrent processing.

Every request in a batch runs as its own unit of work on a thread pool.
Results are written into slots indexed by request position, so the response
order always matches the request order regardless of completion order. One
failing request never affects another.
"""

import asyncio
import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional

from deal_insights.core.config import get_settings
from deal_insights.core.exceptions import InfrastructureFault, NotFoundError
from deal_insights.insights.executor import execute_insight
from deal_insights.insights.factory import get_registry
from deal_insights.insights.models import (
    BatchInsightItem,
    BatchInsightRequest,
    BatchInsightResponse,
    InsightRequest,
    InsightResponse,
)
from deal_insights.insights.registry import InsightRegistry

logger = logging.getLogger(__name__)


def _identifier(requests: List[InsightRequest], index: int) -> str:
    if index < len(requests) and requests[index].insight_id:
        return requests[index].insight_id
    return f"unknown_{index}"


def _to_item(insight_id: str, response: InsightResponse) -> BatchInsightItem:
    if response.success:
        return BatchInsightItem.ok(insight_id, response.data or [], response.columns)
    return BatchInsightItem.failed(insight_id, response.error or "Unknown error")


def execute_batch_insights(
    request: BatchInsightRequest,
    registry: Optional[InsightRegistry] = None,
    max_workers: Optional[int] = None,
) -> BatchInsightResponse:
    """
    Execute several insights concurrently.

    Args:
        request: Ordered list of insight requests
        registry: Registry to resolve insights in; defaults to the
                  process-wide registry
        max_workers: Optional cap on concurrent requests; defaults to
                     settings.batch_max_workers, and None runs one worker
                     per request

    Returns:
        BatchInsightResponse with one item per request, in request order.
        Partial success is normal: each item carries its own outcome.
    """
    requests = list(request.requests)
    if not requests:
        return BatchInsightResponse(results=[])

    if registry is None:
        registry = get_registry()

    limit = max_workers or get_settings().batch_max_workers
    workers = max(1, min(limit, len(requests))) if limit else len(requests)
    slots: List[Optional[BatchInsightItem]] = [None] * len(requests)

    logger.info(f"Executing batch of {len(requests)} insight(s) on {workers} worker(s)")

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="insight") as pool:
        futures: Dict[Future, int] = {}
        for index, insight_request in enumerate(requests):
            try:
                future = pool.submit(execute_insight, insight_request, registry)
            except RuntimeError as e:
                slots[index] = BatchInsightItem.failed(
                    _identifier(requests, index),
                    InfrastructureFault(f"Task failed to start: {e}").message,
                )
                continue
            futures[future] = index

        for future in as_completed(futures):
            index = futures[future]
            insight_id = _identifier(requests, index)
            try:
                slots[index] = _to_item(insight_id, future.result())
            except NotFoundError as e:
                slots[index] = BatchInsightItem.failed(insight_id, e.message)
            except Exception as e:
                logger.error(f"Batch item {index} ({insight_id}) failed: {e}", exc_info=True)
                slots[index] = BatchInsightItem.failed(
                    insight_id, InfrastructureFault(f"Task failed: {type(e).__name__}: {e}").message
                )

    results = [
        slot if slot is not None
        else BatchInsightItem.failed(_identifier(requests, i), "Task did not complete")
        for i, slot in enumerate(slots)
    ]

    succeeded = sum(1 for item in results if item.success)
    logger.info(f"Batch finished: {succeeded}/{len(results)} succeeded")

    return BatchInsightResponse(results=results)


async def execute_batch_insights_async(
    request: BatchInsightRequest,
    registry: Optional[InsightRegistry] = None,
    max_workers: Optional[int] = None,
) -> BatchInsightResponse:
    """
    Await a batch from an event loop.

    The batch itself blocks on file I/O and query work, so it runs in a
    worker thread while the loop stays free.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None,
        lambda: execute_batch_insights(request, registry=registry, max_workers=max_workers),
    )
