"""
JSON Schema validation for insight parameters.
"""

import logging
from typing import Any, Dict, List

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError as JSONSchemaError

from deal_insights.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class ParameterValidator:
    """
    Validates a parameter payload against an insight's declared schema.

    Every violated constraint is reported, each prefixed with the JSON
    pointer of the offending value.
    """

    @staticmethod
    def validate(schema: Dict[str, Any], params: Any) -> None:
        """
        Validate params against a draft-07 JSON Schema.

        Raises:
            ValidationError: listing every violation, one per line
        """
        try:
            Draft7Validator.check_schema(schema)
        except JSONSchemaError as e:
            raise ValidationError(f"Invalid JSON Schema: {e.message}") from e

        validator = Draft7Validator(schema)
        errors = sorted(validator.iter_errors(params), key=lambda err: [str(p) for p in err.absolute_path])
        if not errors:
            return

        messages: List[str] = []
        for err in errors:
            pointer = "".join(f"/{part}" for part in err.absolute_path)
            if pointer:
                messages.append(f"Parameter '{pointer}': {err.message}")
            else:
                messages.append(err.message)

        if len(messages) == 1:
            message = messages[0]
        else:
            message = f"Validation failed with {len(messages)} errors:\n" + "\n".join(messages)

        logger.debug(f"Parameter validation failed: {message}")
        raise ValidationError(message, details={"errors": messages})
