"""EcosystemGraph wrapper around networkx."""

from typing import Any, Iterator

import networkx as nx

from ..schema.models import (
    Entity,
    Relationship,
    RelationshipCategory,
    RelationshipType,
)
from .node_types import EdgeOrigin, NodeType


class EcosystemGraph:
    """A graph of entities and their resolved relationships.

    Wraps a networkx MultiDiGraph. Nodes are entity slugs; parallel edges
    between the same pair of entities are keyed by relationship type, which
    mirrors the ``source|target|type`` identity of a relationship.
    """

    def __init__(self):
        """Initialize an empty graph."""
        self._graph = nx.MultiDiGraph()
        self.categories: dict[str, RelationshipCategory] = {}
        self.types: dict[str, RelationshipType] = {}

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_entity(self, entity: Entity) -> str:
        """Add an entity node.

        Returns:
            The node ID (the entity slug).
        """
        self._graph.add_node(
            entity.slug,
            node_type=NodeType.ENTITY,
            entity=entity,
            entity_type=entity.type,
        )
        return entity.slug

    def add_relationship(self, relationship: Relationship) -> bool:
        """Add a relationship edge between two existing entity nodes.

        Returns:
            False if either endpoint is not in the graph; the edge is not added.
        """
        if not (
            self._graph.has_node(relationship.source)
            and self._graph.has_node(relationship.target)
        ):
            return False

        self._graph.add_edge(
            relationship.source,
            relationship.target,
            key=relationship.type,
            origin=EdgeOrigin.MANUAL if relationship.is_manual else EdgeOrigin.ENTITY,
            relationship=relationship,
        )
        return True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_entity(self, slug: str) -> bool:
        return self._graph.has_node(slug)

    def get_entity_slugs(self) -> list[str]:
        """Get all entity slugs in insertion order."""
        return list(self._graph.nodes)

    def get_entity(self, slug: str) -> Entity | None:
        """Get the entity stored on a node."""
        if not self._graph.has_node(slug):
            return None
        return self._graph.nodes[slug]["entity"]

    def iter_entities(self) -> Iterator[Entity]:
        for _, data in self._graph.nodes(data=True):
            yield data["entity"]

    def iter_relationships(self) -> Iterator[Relationship]:
        """Iterate over all relationship edges."""
        for _, _, data in self._graph.edges(data=True):
            yield data["relationship"]

    @property
    def entity_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def relationship_count(self) -> int:
        return self._graph.number_of_edges()

    def has_any_relationships(self, slug: str) -> bool:
        """Check if an entity has any relationships (in or out)."""
        if not self._graph.has_node(slug):
            return False
        return self._graph.degree(slug) > 0

    def get_relationships_for_entity(self, slug: str) -> list[dict[str, Any]]:
        """Get all relationships touching an entity (both directions)."""
        if not self._graph.has_node(slug):
            return []

        relationships = []
        for _, target, key in self._graph.out_edges(slug, keys=True):
            relationships.append({"type": key, "target": target, "direction": "outgoing"})
        for source, _, key in self._graph.in_edges(slug, keys=True):
            relationships.append({"type": key, "target": source, "direction": "incoming"})
        return relationships

    def get_neighbors(self, slug: str) -> set[str]:
        """Get entities connected to an entity in either direction."""
        if not self._graph.has_node(slug):
            return set()
        return set(self._graph.successors(slug)) | set(self._graph.predecessors(slug))

    def get_clusters(self) -> list[set[str]]:
        """Group entities into weakly connected clusters, largest first."""
        return sorted(
            (set(c) for c in nx.weakly_connected_components(self._graph)),
            key=len,
            reverse=True,
        )
