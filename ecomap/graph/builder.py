"""Builder for converting an EcosystemDataset to an EcosystemGraph."""

import logging

from ..config.models import EdgeStyling, RenderConfig
from ..data.dataset import EcosystemDataset
from ..schema.models import Relationship
from .ecosystem_graph import EcosystemGraph

logger = logging.getLogger(__name__)


def edge_is_shown(relationship: Relationship, edges: EdgeStyling | None) -> bool:
    """Apply the edge filters of a graph configuration to one relationship."""
    if edges is None:
        return True

    if edges.show_manual_relationships is False and relationship.is_manual:
        return False
    if edges.show_entity_relationships is False and not relationship.is_manual:
        return False

    if edges.relationship_types and relationship.type not in edges.relationship_types:
        return False

    if (
        edges.relationship_categories
        and relationship.category
        and relationship.category not in edges.relationship_categories
    ):
        return False

    return True


def build_graph(
    dataset: EcosystemDataset,
    config: RenderConfig | None = None,
) -> EcosystemGraph:
    """Build an EcosystemGraph from a dataset.

    Args:
        dataset: The resolved dataset.
        config: Optional render configuration. When given, only entities of
            its ``entityTypes`` become nodes and its edge filters apply.

    Returns:
        A graph whose edges all connect known nodes.
    """
    graph = EcosystemGraph()
    graph.categories = dict(dataset.categories)
    graph.types = dict(dataset.types)

    for entity in dataset.entities:
        if config is None or config.allows(entity.type):
            graph.add_entity(entity)

    edges = config.graph.edges if config and config.graph else None

    dropped = 0
    for relationship in dataset.relationships:
        if not edge_is_shown(relationship, edges):
            continue
        if not graph.add_relationship(relationship):
            dropped += 1

    if dropped:
        logger.debug("Dropped %d relationships referencing unknown entities", dropped)

    return graph
