"""
Data models for deal records and deal imports.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

import pandas as pd

DATASET_EXTENSION = ".parquet"

INTEGER_TYPE = "BIGINT"
FLOAT_TYPE = "DOUBLE"
STRING_TYPE = "VARCHAR"

# Canonical deal schema: column name -> DuckDB type of the Parquet column.
# Order matters; it is the column order of the Deal record.
DEAL_SCHEMA: Tuple[Tuple[str, str], ...] = (
    ("ticket", INTEGER_TYPE),
    ("order", INTEGER_TYPE),
    ("time", INTEGER_TYPE),
    ("time_msc", INTEGER_TYPE),
    ("type", INTEGER_TYPE),
    ("entry", INTEGER_TYPE),
    ("magic", INTEGER_TYPE),
    ("position_id", INTEGER_TYPE),
    ("reason", INTEGER_TYPE),
    ("volume", FLOAT_TYPE),
    ("price", FLOAT_TYPE),
    ("commission", FLOAT_TYPE),
    ("swap", FLOAT_TYPE),
    ("profit", FLOAT_TYPE),
    ("fee", FLOAT_TYPE),
    ("symbol", STRING_TYPE),
    ("comment", STRING_TYPE),
    ("external_id", STRING_TYPE),
)

REQUIRED_COLUMNS: List[str] = [name for name, _ in DEAL_SCHEMA]

_DEFAULTS = {INTEGER_TYPE: 0, FLOAT_TYPE: 0.0, STRING_TYPE: ""}


def get_column_type(column_name: str):
    """Get the expected DuckDB type for a deal column, or None if unknown."""
    return dict(DEAL_SCHEMA).get(column_name)


def _is_missing(value: Any) -> bool:
    return value is None or bool(pd.isna(value))


def _coerce(value: Any, column_type: str) -> Any:
    if _is_missing(value):
        return _DEFAULTS[column_type]
    try:
        if column_type == INTEGER_TYPE:
            return int(value)
        if column_type == FLOAT_TYPE:
            return float(value)
        return str(value)
    except (TypeError, ValueError):
        return _DEFAULTS[column_type]


@dataclass(frozen=True)
class Deal:
    """A single deal (trade or account operation) read from a deals file."""
    ticket: int
    order: int
    time: int
    time_msc: int
    type: int
    entry: int
    magic: int
    position_id: int
    reason: int
    volume: float
    price: float
    commission: float
    swap: float
    profit: float
    fee: float
    symbol: str
    comment: str
    external_id: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Deal":
        """
        Build a Deal from a columnar row.

        Missing or unreadable values fall back to 0, 0.0 or "" instead of
        failing the whole read.
        """
        return cls(**{
            name: _coerce(row.get(name), column_type)
            for name, column_type in DEAL_SCHEMA
        })

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class FileImportResult:
    """Result for a single file import operation."""
    filename: str
    success: bool
    message: str

    @classmethod
    def ok(cls, filename: str, message: str) -> "FileImportResult":
        return cls(filename=filename, success=True, message=message)

    @classmethod
    def failed(cls, filename: str, message: str) -> "FileImportResult":
        return cls(filename=filename, success=False, message=message)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DealImportResult:
    """Result of a deal import operation."""
    success: bool
    message: str
    file_results: List[FileImportResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "file_results": [r.to_dict() for r in self.file_results],
        }
