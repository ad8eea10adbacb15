"""Validators for entity data and manual relationships."""

from .base import Severity, ValidationIssue, ValidationResult
from .entity_schema import check_entity_schema, invalid_entity_count, too_many_invalid
from .orphan_detector import check_orphan_entities
from .reference_integrity import check_reference_integrity
from .relationship_lint import check_manual_relationships
from .runner import run_validators, validate_data_source, validate_relationships_file

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_entity_schema",
    "invalid_entity_count",
    "too_many_invalid",
    "check_orphan_entities",
    "check_reference_integrity",
    "check_manual_relationships",
    "run_validators",
    "validate_data_source",
    "validate_relationships_file",
]
