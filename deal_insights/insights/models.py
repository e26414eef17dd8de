"""
Request and response envelopes for insight execution.

Failures are returned as values: an InsightResponse with success=False is a
normal outcome, not an error.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

Row = Dict[str, Any]


class InsightRequest(BaseModel):
    """Request to execute an insight."""
    insight_id: str = Field(..., description="Unique identifier of the insight, e.g. 'deals.total_balance'")
    parameters: Any = Field(
        default_factory=dict,
        description="Insight parameters; the accepted shape depends on the insight"
    )


class InsightResponse(BaseModel):
    """Response from executing an insight."""
    success: bool
    data: Optional[List[Row]] = None
    error: Optional[str] = None
    columns: List[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, data: List[Row], columns: List[str]) -> "InsightResponse":
        return cls(success=True, data=data, error=None, columns=columns)

    @classmethod
    def failed(cls, message: str) -> "InsightResponse":
        return cls(success=False, data=None, error=message, columns=[])


class BatchInsightRequest(BaseModel):
    """Batch request to execute several insights concurrently."""
    requests: List[InsightRequest] = Field(default_factory=list)


class BatchInsightItem(BaseModel):
    """Result for one request in a batch."""
    insight_id: str
    success: bool
    data: Optional[List[Row]] = None
    error: Optional[str] = None
    columns: List[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, insight_id: str, data: List[Row], columns: List[str]) -> "BatchInsightItem":
        return cls(insight_id=insight_id, success=True, data=data, columns=columns)

    @classmethod
    def failed(cls, insight_id: str, message: str) -> "BatchInsightItem":
        return cls(insight_id=insight_id, success=False, data=None, error=message, columns=[])


class BatchInsightResponse(BaseModel):
    """Batch results, in the same order as the requests."""
    results: List[BatchInsightItem] = Field(default_factory=list)


class InsightDescriptor(BaseModel):
    """Inspectable description of a registered insight."""
    insight_id: str
    name: str
    description: str
    parameter_schema: Dict[str, Any]
