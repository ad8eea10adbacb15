"""Orphan entity detection validator."""

from ..graph.ecosystem_graph import EcosystemGraph
from .base import ValidationResult


def check_orphan_entities(graph: EcosystemGraph) -> ValidationResult:
    """Check for entities with no relationships.

    Isolated entities are legitimate in an ecosystem map, so these are
    reported as informational issues only.

    Args:
        graph: The ecosystem graph to check.

    Returns:
        ValidationResult with info issues for orphan entities.
    """
    result = ValidationResult()

    for slug in graph.get_entity_slugs():
        if not graph.has_any_relationships(slug):
            result.add_info(
                code="ORPHAN_ENTITY",
                message=f"Entity '{slug}' has no relationships to other entities",
                subject=slug,
            )

    return result
