"""
Unit tests for JSON Schema parameter validation.
"""

import pytest

from deal_insights.core.exceptions import ValidationError
from deal_insights.insights.deals.profit_by_symbol import PARAMETER_SCHEMA
from deal_insights.insights.validator import ParameterValidator

SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "a": {"type": "string"},
        "b": {"type": "number"},
    },
    "required": ["a"],
}


class TestParameterValidator:
    """Test violation reporting."""

    def test_valid_payload(self):
        ParameterValidator.validate(SCHEMA, {"a": "x", "b": 1.5})

    def test_single_error_has_pointer(self):
        with pytest.raises(ValidationError) as exc_info:
            ParameterValidator.validate(SCHEMA, {"a": 1})
        assert exc_info.value.message == "Parameter '/a': 1 is not of type 'string'"

    def test_all_errors_collected(self):
        """Every violation is reported, one per line."""
        with pytest.raises(ValidationError) as exc_info:
            ParameterValidator.validate(SCHEMA, {"a": 1, "b": "x"})

        lines = exc_info.value.message.split("\n")
        assert lines[0] == "Validation failed with 2 errors:"
        assert lines[1].startswith("Parameter '/a':")
        assert lines[2].startswith("Parameter '/b':")
        assert len(exc_info.value.details["errors"]) == 2

    def test_root_error_has_no_pointer(self):
        with pytest.raises(ValidationError) as exc_info:
            ParameterValidator.validate(SCHEMA, {})
        assert exc_info.value.message == "'a' is a required property"

    def test_non_object_payload(self):
        with pytest.raises(ValidationError) as exc_info:
            ParameterValidator.validate(PARAMETER_SCHEMA, [1, 2])
        assert "is not of type 'object'" in exc_info.value.message

    def test_nullable_properties(self):
        ParameterValidator.validate(PARAMETER_SCHEMA, {"account_number": None, "min_profit": None})

    def test_invalid_schema(self):
        with pytest.raises(ValidationError) as exc_info:
            ParameterValidator.validate({"type": "banana"}, {})
        assert exc_info.value.message.startswith("Invalid JSON Schema:")
