"""Node/link payloads for the graph view."""

from typing import Any

from ..config.models import RenderConfig
from .ecosystem_graph import EcosystemGraph
from .styling import link_color, link_dash, link_width, node_color, node_size


def graph_view_data(graph: EcosystemGraph, config: RenderConfig) -> dict[str, Any]:
    """Serialize a graph into styled nodes and links for a force layout.

    Args:
        graph: A graph built with the same configuration.
        config: The render configuration supplying styling rules.

    Returns:
        A mapping with ``nodes``, ``links``, ``physics``, ``width`` and
        ``height``.
    """
    graph_config = config.graph
    nodes_config = graph_config.nodes if graph_config else None
    edges_config = graph_config.edges if graph_config else None

    entities = list(graph.iter_entities())
    entity_types = list(dict.fromkeys(e.type for e in entities))

    nodes = []
    for entity in entities:
        node = {"id": entity.slug, **entity.model_dump(exclude_none=True)}
        node["size"] = node_size(nodes_config.size_by if nodes_config else None, entity)
        node["color"] = node_color(
            nodes_config.color_by if nodes_config else None, entity, entity_types
        )
        if nodes_config and nodes_config.show_labels:
            label = entity.lookup(nodes_config.label_field or "name")
            node["label"] = "" if label is None else str(label)
        nodes.append(node)

    relationships = list(graph.iter_relationships())
    relationship_types = list(dict.fromkeys(r.type for r in relationships))

    links = []
    for rel in relationships:
        link = rel.to_dict()
        link["width"] = link_width(edges_config.width_by if edges_config else None, rel)
        link["color"] = link_color(
            rel, edges_config, graph.categories, graph.types, relationship_types
        )
        link["dash"] = link_dash(rel, edges_config, graph.categories)
        links.append(link)

    return {
        "nodes": nodes,
        "links": links,
        "physics": dict(graph_config.physics) if graph_config else {},
        "width": graph_config.width if graph_config else None,
        "height": graph_config.height if graph_config else None,
    }
