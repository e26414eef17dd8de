"""
Parquet validator for the deals schema.

A deals file is accepted only when it matches the canonical schema exactly:
same column set, same column types, and no nulls anywhere.
"""

import logging
from pathlib import Path
from typing import List, Union

import duckdb

from deal_insights.core.duckdb_manager import get_duckdb
from deal_insights.core.exceptions import SchemaError, SchemaIssue
from deal_insights.deals.models import DEAL_SCHEMA, REQUIRED_COLUMNS

logger = logging.getLogger(__name__)


class DealSchemaValidator:
    """
    Validates deals Parquet files against the canonical schema.

    Checks:
    - File exists and is valid Parquet (not corrupted)
    - Column set is exactly the required set (no missing, no extra)
    - Every column has the expected type (no implicit widening)
    - No column contains null values

    Structural problems (missing, unexpected and mistyped columns) are
    collected and reported together; null counts are reported for every
    column that has them.
    """

    def validate(self, file_path: Union[str, Path]) -> None:
        """
        Validate a deals file.

        Raises:
            SchemaError: describing every discrepancy found
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise SchemaError([SchemaIssue(None, f"File does not exist: {file_path}")])

        manager = get_duckdb()
        with manager.cursor() as cur:
            try:
                relation = manager.read_parquet(cur, file_path)
                actual = manager.describe(relation)
            except duckdb.Error as e:
                raise SchemaError([SchemaIssue(
                    None,
                    f"Failed to read parquet file (file may be corrupted): {e}",
                )]) from e

            issues = self._structural_issues(dict(actual))
            if issues:
                logger.info(f"Rejected {file_path.name}: {len(issues)} schema issue(s)")
                raise SchemaError(issues)

            try:
                issues = self._null_issues(relation)
            except duckdb.Error as e:
                raise SchemaError([SchemaIssue(
                    None, f"Failed to read parquet file: {e}",
                )]) from e

        if issues:
            logger.info(f"Rejected {file_path.name}: null values present")
            raise SchemaError(issues)

        logger.debug(f"Validated deals file: {file_path}")

    @staticmethod
    def _structural_issues(actual: dict) -> List[SchemaIssue]:
        issues: List[SchemaIssue] = []

        for column in REQUIRED_COLUMNS:
            if column not in actual:
                issues.append(SchemaIssue(column, f"Missing required column: {column}"))

        for column in actual:
            if column not in REQUIRED_COLUMNS:
                issues.append(SchemaIssue(
                    column,
                    f"Unexpected column found: {column}. Schema must match exactly.",
                ))

        for column, expected_type in DEAL_SCHEMA:
            actual_type = actual.get(column)
            if actual_type is not None and actual_type != expected_type:
                issues.append(SchemaIssue(
                    column,
                    f"Column '{column}' has incorrect type. "
                    f"Expected {expected_type}, found {actual_type}",
                ))

        return issues

    @staticmethod
    def _null_issues(relation: "duckdb.DuckDBPyRelation") -> List[SchemaIssue]:
        counts = ", ".join(
            f'count(*) - count("{column}")' for column in REQUIRED_COLUMNS
        )
        row = relation.aggregate(counts).fetchone()

        issues = []
        for column, null_count in zip(REQUIRED_COLUMNS, row or ()):
            if null_count:
                issues.append(SchemaIssue(
                    column,
                    f"Column '{column}' contains {null_count} null value(s). "
                    f"All columns must be non-nullable.",
                ))
        return issues


def validate_deals_schema(file_path: Union[str, Path]) -> None:
    """Validate a deals file against the canonical schema."""
    DealSchemaValidator().validate(file_path)
