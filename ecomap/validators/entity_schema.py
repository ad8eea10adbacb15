"""JSON-Schema validation of raw entity records."""

from typing import Any, Iterable

from ..schema.validator import SchemaValidator
from .base import ValidationResult

# Fraction of invalid entities above which a dataset is rejected
INVALID_THRESHOLD = 0.5


def _subject(record: Any, index: int) -> str:
    if isinstance(record, dict) and record.get("slug"):
        return str(record["slug"])
    return f"entity #{index + 1}"


def check_entity_schema(
    records: Iterable[Any], validator: SchemaValidator
) -> ValidationResult:
    """Validate each record against the entity schema.

    Every invalid record yields exactly one error. The violated constraints
    are listed under ``details["errors"]``, one entry per constraint.

    Args:
        records: Raw entity records as parsed from the data files.
        validator: The compiled entity schema.

    Returns:
        ValidationResult with ``checked`` set to the number of records.
    """
    result = ValidationResult()

    for index, record in enumerate(records):
        result.checked += 1
        field_errors = validator.validate(record)
        if not field_errors:
            continue

        result.add_error(
            code="SCHEMA_VIOLATION",
            message=f"{len(field_errors)} schema violation(s): {field_errors[0]}",
            subject=_subject(record, index),
            index=index,
            errors=[
                {"field": e.field, "message": e.message, "value": e.value}
                for e in field_errors
            ],
        )

    return result


def invalid_entity_count(result: ValidationResult) -> int:
    """Count records rejected by the schema."""
    return sum(1 for issue in result.errors if issue.code == "SCHEMA_VIOLATION")


def too_many_invalid(
    result: ValidationResult, threshold: float = INVALID_THRESHOLD
) -> bool:
    """Check whether more than ``threshold`` of the checked records are invalid."""
    return invalid_entity_count(result) > result.checked * threshold
