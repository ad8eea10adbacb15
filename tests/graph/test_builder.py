"""Tests for graph builder."""

from ecomap.config.resolver import default_config, parachain_table_config, update_config
from ecomap.graph.builder import build_graph, edge_is_shown
from ecomap.config.models import EdgeStyling
from ecomap.schema.models import Relationship


def _edges(graph):
    return {r.key for r in graph.iter_relationships()}


class TestBuildGraph:
    def test_build_entities(self, sample_graph):
        assert sample_graph.get_entity_slugs() == ["moonbeam", "acala", "stellaswap", "subscan"]

    def test_dangling_relationships_dropped(self, sample_graph):
        assert sample_graph.relationship_count == 4
        assert "subscan|unknown-chain|indexes" not in _edges(sample_graph)

    def test_every_edge_connects_known_nodes(self, sample_graph):
        for rel in sample_graph.iter_relationships():
            assert sample_graph.has_entity(rel.source)
            assert sample_graph.has_entity(rel.target)

    def test_styles_copied(self, sample_graph):
        assert "business" in sample_graph.categories
        assert "integrates" in sample_graph.types

    def test_entity_type_filter(self, sample_dataset):
        graph = build_graph(sample_dataset, parachain_table_config())

        assert graph.get_entity_slugs() == ["moonbeam", "acala"]
        assert _edges(graph) == {"acala|moonbeam|integrates", "moonbeam|acala|integrates"}

    def test_hide_manual_relationships(self, sample_dataset):
        config = update_config(
            default_config(), {"graph": {"edges": {"showManualRelationships": False}}}
        )
        graph = build_graph(sample_dataset, config)

        assert _edges(graph) == {"stellaswap|moonbeam|built_on"}

    def test_hide_entity_relationships(self, sample_dataset):
        config = update_config(
            default_config(), {"graph": {"edges": {"showEntityRelationships": False}}}
        )
        graph = build_graph(sample_dataset, config)

        assert "stellaswap|moonbeam|built_on" not in _edges(graph)
        assert graph.relationship_count == 3

    def test_relationship_type_filter(self, sample_dataset):
        config = update_config(
            default_config(), {"graph": {"edges": {"relationshipTypes": ["integrates"]}}}
        )
        graph = build_graph(sample_dataset, config)

        assert _edges(graph) == {"acala|moonbeam|integrates", "moonbeam|acala|integrates"}


class TestEdgeIsShown:
    def test_no_filters(self):
        assert edge_is_shown(Relationship(source="a", target="b", type="uses"), None)

    def test_category_filter_passes_uncategorized(self):
        edges = EdgeStyling(relationship_categories=["technical"])

        assert edge_is_shown(Relationship(source="a", target="b", type="uses"), edges)
        assert not edge_is_shown(
            Relationship(source="a", target="b", type="uses", category="business"), edges
        )
        assert edge_is_shown(
            Relationship(source="a", target="b", type="uses", category="technical"), edges
        )
