"""
Unit tests for the deals Parquet schema validator.
"""

import pytest

from deal_insights.core.exceptions import SchemaError
from deal_insights.deals.store import DealStore
from deal_insights.deals.validator import DealSchemaValidator, validate_deals_schema

from conftest import ACCOUNT_1001, deals_select, write_select


class TestDealSchemaValidator:
    """Test acceptance and rejection of deals files."""

    def test_valid_file_passes(self, tmp_path):
        """A file written with the canonical schema is accepted."""
        path = DealStore.write_deals(tmp_path / "ok.parquet", ACCOUNT_1001)
        DealSchemaValidator().validate(path)

    def test_valid_select_passes(self, tmp_path):
        path = write_select(tmp_path / "ok.parquet", deals_select())
        validate_deals_schema(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaError) as exc_info:
            validate_deals_schema(tmp_path / "nope.parquet")
        assert exc_info.value.message.startswith("File does not exist:")

    def test_corrupted_file(self, tmp_path):
        """Bytes that are not Parquet are reported as unreadable."""
        path = tmp_path / "bad.parquet"
        path.write_bytes(b"definitely not parquet")

        with pytest.raises(SchemaError) as exc_info:
            validate_deals_schema(path)
        assert "Failed to read parquet file" in exc_info.value.message

    def test_missing_column(self, tmp_path):
        path = write_select(tmp_path / "f.parquet", deals_select(drop=["fee"]))

        with pytest.raises(SchemaError) as exc_info:
            validate_deals_schema(path)
        assert exc_info.value.message == "Missing required column: fee"
        assert exc_info.value.columns == ["fee"]

    def test_unexpected_column(self, tmp_path):
        path = write_select(tmp_path / "f.parquet", deals_select(extra={"bonus": "DOUBLE"}))

        with pytest.raises(SchemaError) as exc_info:
            validate_deals_schema(path)
        assert exc_info.value.message == (
            "Unexpected column found: bonus. Schema must match exactly."
        )

    def test_incorrect_type_is_not_widened(self, tmp_path):
        """A 32-bit integer column is rejected where 64 bits are required."""
        path = write_select(tmp_path / "f.parquet", deals_select(types={"ticket": "INTEGER"}))

        with pytest.raises(SchemaError) as exc_info:
            validate_deals_schema(path)
        assert exc_info.value.message == (
            "Column 'ticket' has incorrect type. Expected BIGINT, found INTEGER"
        )

    def test_structural_issues_reported_together(self, tmp_path):
        """Missing, extra and mistyped columns all appear in one error."""
        sql = deals_select(
            drop=["comment"],
            extra={"bonus": "DOUBLE"},
            types={"volume": "FLOAT"},
        )
        path = write_select(tmp_path / "f.parquet", sql)

        with pytest.raises(SchemaError) as exc_info:
            validate_deals_schema(path)

        error = exc_info.value
        assert len(error.issues) == 3
        assert error.message.startswith("Schema validation failed with 3 errors:")
        assert set(error.columns) == {"comment", "bonus", "volume"}

    def test_null_values_rejected(self, tmp_path):
        path = write_select(
            tmp_path / "f.parquet",
            deals_select(null_columns=["symbol", "profit"]),
        )

        with pytest.raises(SchemaError) as exc_info:
            validate_deals_schema(path)

        error = exc_info.value
        assert set(error.columns) == {"symbol", "profit"}
        assert (
            "Column 'profit' contains 1 null value(s). All columns must be non-nullable."
            in error.message
        )
