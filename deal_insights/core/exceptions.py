"""
Error taxonomy for the insight engine.

Every recoverable failure raised by the deal and insight layers derives from
InsightError so callers can convert it into a failure envelope. Registry
misuse is the one programming error and is a RuntimeError instead.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


class InsightError(Exception):
    """Base error for the insight engine."""

    error_type = "insight_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(InsightError):
    """Unknown insight identifier, or a referenced deal file is absent."""

    error_type = "not_found"

    def __init__(self, resource: str, identifier: str, message: Optional[str] = None):
        super().__init__(
            message or f"{resource} not found: {identifier}",
            details={"resource": resource, "identifier": identifier},
        )
        self.resource = resource
        self.identifier = identifier


class ValidationError(InsightError):
    """Parameter payload failed schema or insight-specific validation."""

    error_type = "validation_error"


class ExecutionError(InsightError):
    """A query pipeline failed (unreadable file, corrupt dataset, bad cast)."""

    error_type = "execution_error"


class InfrastructureFault(InsightError):
    """A concurrent unit of work failed to run at all."""

    error_type = "infrastructure_fault"


@dataclass
class SchemaIssue:
    """One schema discrepancy found in a dataset."""
    column: Optional[str]
    message: str


class SchemaError(InsightError):
    """A dataset does not conform to the canonical deal schema."""

    error_type = "schema_error"

    def __init__(self, issues: List[SchemaIssue]):
        self.issues = list(issues)
        if len(self.issues) == 1:
            message = self.issues[0].message
        else:
            message = "Schema validation failed with {} errors:\n{}".format(
                len(self.issues),
                "\n".join(issue.message for issue in self.issues),
            )
        super().__init__(
            message,
            details={"columns": [i.column for i in self.issues if i.column]},
        )

    @property
    def columns(self) -> List[str]:
        """Names of the columns involved in any issue."""
        return [issue.column for issue in self.issues if issue.column]


class RegistryNotInitializedError(RuntimeError):
    """The insight registry was used before application start-up finished."""
