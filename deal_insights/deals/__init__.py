"""
Deals - canonical deal schema, schema validation and the deals directory.
"""

from deal_insights.deals.models import DEAL_SCHEMA, Deal, DealImportResult, FileImportResult
from deal_insights.deals.store import DealStore
from deal_insights.deals.validator import DealSchemaValidator, validate_deals_schema

__all__ = [
    "DEAL_SCHEMA",
    "Deal",
    "DealImportResult",
    "FileImportResult",
    "DealStore",
    "DealSchemaValidator",
    "validate_deals_schema",
]
