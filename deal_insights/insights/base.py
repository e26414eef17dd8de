"""
The Insight capability.

An insight is any object with the methods of the Insight protocol below.
Variants are independent classes composed with a DealStore; shared
parameter handling lives in plain helper functions rather than a base class.
"""

import logging
from dataclasses import asdict, is_dataclass
from pathlib import PurePath
from typing import Any, Dict, List, Optional, Protocol, Type, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from deal_insights.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

JSON_SCHEMA_DRAFT_07 = "http://json-schema.org/draft-07/schema#"

ACCOUNT_NUMBER_PROPERTY: Dict[str, Any] = {
    "type": ["string", "null"],
    "description": "Optional account number (filename without .parquet extension). "
                   "If not provided, all deal files are read.",
}

P = TypeVar("P", bound=BaseModel)


@runtime_checkable
class Insight(Protocol):
    """Capability shared by every registered insight."""

    def identifier(self) -> str:
        """Stable unique identifier, e.g. "deals.profit_by_symbol"."""
        ...

    def name(self) -> str:
        ...

    def description(self) -> str:
        ...

    def parameter_schema(self) -> Dict[str, Any]:
        """Draft-07 JSON Schema of the accepted parameters."""
        ...

    def validate_parameters(self, params: Any) -> None:
        """Raise ValidationError if params cannot be used by this insight."""
        ...

    def execute(self, params: Any) -> List[Dict[str, Any]]:
        """Run the insight and return one dict per result row."""
        ...


class AccountParams(BaseModel):
    """Parameters shared by every deal insight."""

    model_config = ConfigDict(extra="ignore")

    account_number: Optional[str] = None

    @field_validator("account_number")
    @classmethod
    def _bare_file_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not value.strip():
            raise ValueError("account_number must not be empty")
        if value in (".", "..") or PurePath(value).name != value or "\\" in value:
            raise ValueError("account_number must be a file name, not a path")
        return value


def object_schema(title: str, properties: Dict[str, Any]) -> Dict[str, Any]:
    """Build a draft-07 object schema literal."""
    return {
        "$schema": JSON_SCHEMA_DRAFT_07,
        "title": title,
        "type": "object",
        "properties": properties,
    }


def parse_parameters(model: Type[P], params: Any) -> P:
    """
    Deserialize a raw payload into a parameter model.

    Raises:
        ValidationError: if the payload does not fit the model
    """
    try:
        return model.model_validate(params)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'parameters'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(f"Invalid parameters: {problems}") from e


def to_rows(results: List[Any]) -> List[Dict[str, Any]]:
    """Serialize result records (dataclasses or mappings) into dict rows."""
    rows = []
    for result in results:
        if is_dataclass(result):
            rows.append(asdict(result))
        else:
            rows.append(dict(result))
    return rows
