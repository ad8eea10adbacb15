"""Validation runner that orchestrates all validators."""

import logging
from pathlib import Path

from ..data.dataset import EcosystemDataset, build_dataset
from ..data.errors import DataLoadError
from ..data.loader import (
    DATA_MANIFEST,
    collect_records,
    fetch_manifest,
    select_valid_entities,
)
from ..data.relationships import load_manual_relationships
from ..data.sources import ResourceSource
from ..graph.builder import build_graph
from ..graph.ecosystem_graph import EcosystemGraph
from ..schema.loader import load_yaml_document
from ..schema.validator import load_schema
from .base import ValidationResult
from .entity_schema import check_entity_schema
from .reference_integrity import check_reference_integrity
from .orphan_detector import check_orphan_entities
from .relationship_lint import check_manual_relationships

logger = logging.getLogger(__name__)


def run_validators(dataset: EcosystemDataset, graph: EcosystemGraph) -> ValidationResult:
    """Run the structural validators on a resolved dataset.

    Args:
        dataset: The resolved dataset.
        graph: The graph built from it.

    Returns:
        Combined ValidationResult from all validators.
    """
    result = ValidationResult()
    result.merge(check_reference_integrity(dataset))
    result.merge(check_orphan_entities(graph))
    return result


def validate_data_source(
    source: ResourceSource,
    schema_path: str | Path,
    manifest=DATA_MANIFEST,
) -> ValidationResult:
    """Validate every entity record reachable from a source.

    Records are checked against the JSON Schema first. The entities that
    survive are then resolved and run through the structural validators.

    Args:
        source: Where the data files live.
        schema_path: Path to the entity JSON Schema (YAML).
        manifest: Resource names to read.

    Returns:
        ValidationResult whose ``checked`` count is the number of records.

    Raises:
        SchemaLoadError: If the schema cannot be loaded.
        DataLoadError: If the source yields no records at all.
    """
    validator = load_schema(schema_path)

    records = collect_records(fetch_manifest(source, manifest))
    if not records:
        raise DataLoadError(f"No entities found in {source!r}")

    result = check_entity_schema(records, validator)

    entities = select_valid_entities(records)
    if entities:
        dataset = build_dataset(entities, load_manual_relationships(source))
        result.merge(run_validators(dataset, build_graph(dataset)))
    else:
        logger.warning("No entity passed validation; skipping structural checks")

    return result


def validate_relationships_file(path: str | Path) -> ValidationResult:
    """Load and lint a manual relationships file.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    return check_manual_relationships(load_yaml_document(path))
